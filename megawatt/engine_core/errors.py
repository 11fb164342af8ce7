"""
Engine errors.

- IllegalMove: a submitted move is not among the available commands, or its
  data fails validation. Nothing has been applied when it is raised.
- InvalidPlayerReference: lookup of a player id that does not exist.
  Signals a corrupted log or a caller bug.
- ReplayDivergence: replaying the log disagrees with recorded state.
  Unrecoverable; the engine instance should be discarded.

Exhausted draw piles and empty resource pools are not errors.
"""

from __future__ import annotations
from typing import Any


class EngineError(Exception):
    """Base class for engine errors."""


class IllegalMove(EngineError):
    """Raised when a move is rejected."""

    def __init__(self, message: str, player: str | None = None, move: str | None = None):
        self.player = player
        self.move = move
        super().__init__(message)


class InvalidPlayerReference(EngineError, KeyError):
    """Raised when a player id does not match any player."""

    def __init__(self, player_id: Any):
        self.player_id = player_id
        super().__init__(f"No player with id {player_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class ReplayDivergence(EngineError):
    """Raised when replayed state disagrees with what was recorded."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)
