"""
Pytest fixtures for megawatt tests.
"""

import pytest

from ..api.service import GameService
from ..games.powerplant import Engine, GameOptions


@pytest.fixture
def options() -> GameOptions:
    """Default options, independent of the environment."""
    return GameOptions()


@pytest.fixture
def two_player_game(options: GameOptions) -> Engine:
    """A 2-player game seeded "seed", waiting for the first nomination."""
    engine = Engine()
    engine.init(2, "seed", options)
    return engine


@pytest.fixture
def three_player_game(options: GameOptions) -> Engine:
    """A 3-player game seeded "auction"."""
    engine = Engine()
    engine.init(3, "auction", options)
    return engine


@pytest.fixture
def service() -> GameService:
    """Create a fresh game service."""
    return GameService()
