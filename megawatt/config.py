"""Runtime configuration read from the environment.

Override: MEGAWATT_STARTING_MONEY, MEGAWATT_ROUND_LIMIT, MEGAWATT_STARVED_AUCTION.
Values here are only defaults; each game records its own options in its log.
"""
from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    """Read integer env var, falling back to default on empty or garbage values."""
    val = os.environ.get(name, "").strip()
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, val, default)
        return default


def _env_choice(name: str, choices: tuple[str, ...], default: str) -> str:
    """Read an env var restricted to a fixed set of values."""
    val = os.environ.get(name, "").strip().lower()
    if not val:
        return default
    if val not in choices:
        logger.warning("Ignoring %s=%r (expected one of %s), using %s", name, val, choices, default)
        return default
    return val


MIN_PLAYERS = 2
MAX_PLAYERS = 6

STARTING_MONEY = _env_int("MEGAWATT_STARTING_MONEY", 50)

# 0 means no limit: the game only ends through the city threshold
ROUND_LIMIT = _env_int("MEGAWATT_ROUND_LIMIT", 0)

# What happens when the player to nominate cannot afford any plant in round 1
STARVED_AUCTION_POLICY = _env_choice("MEGAWATT_STARVED_AUCTION", ("pass", "skip"), "pass")
