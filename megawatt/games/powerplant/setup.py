"""
Power plant game setup - Creates a started engine.

The board, player colors and turn order all come from the seed, through
the GameStart event, so the same seed always deals the same game.
"""

from __future__ import annotations
import logging
import uuid

from .engine import Engine
from .options import GameOptions

logger = logging.getLogger(__name__)


def setup_powerplant_game(
    num_players: int = 2,
    seed: str | None = None,
    options: GameOptions | None = None,
) -> Engine:
    """
    Set up a new game.

    Args:
        num_players: Number of players (2-6)
        seed: Seed for deterministic shuffling (random if not provided)
        options: Game options (read from the environment if not provided)

    Returns:
        Engine waiting for the first move of round 1
    """
    if seed is None:
        seed = uuid.uuid4().hex

    engine = Engine()
    engine.init(num_players, seed, options)
    logger.info("New %d-player game, seed %r, turn order %s", num_players, seed, engine.turnorder)
    return engine
