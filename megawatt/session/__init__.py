"""
Session Module - Manages running games.

A session represents one play-through:
- Created when a game starts, or restored from a snapshot
- Holds the game engine
- Dropped when the game ends

Sessions are in-memory only; snapshots are the only saved form of a game.
"""

from .manager import SessionManager, Session, SessionState

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
]
