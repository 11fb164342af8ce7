"""
Session Manager - Creates and tracks running games.

LIFECYCLE:
1. A game is created from a player count and a seed, or restored from a
   saved snapshot
2. Moves are submitted against the session's engine
3. The session ends when the game ends or the caller drops it

Sessions live in memory only. Saving a game means exporting the engine
snapshot; the caller decides where it is stored.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..games.powerplant import Engine, GameOptions, setup_powerplant_game

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # GameEnd reached
    ABANDONED = "abandoned"  # Dropped before the end


@dataclass
class Session:
    """One running game and its metadata."""
    session_id: str
    engine: Engine
    created_at: float
    state: SessionState = SessionState.ACTIVE
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE and not self.engine.ended

    def refresh(self) -> None:
        """Mark the session over once its engine has logged GameEnd."""
        if self.engine.ended and self.state == SessionState.ACTIVE:
            self.state = SessionState.GAME_OVER


class SessionManager:
    """
    Keeps running games by id.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        num_players: int = 2,
        seed: str | None = None,
        options: GameOptions | None = None,
    ) -> Session:
        """Start a new game and register it."""
        engine = setup_powerplant_game(num_players=num_players, seed=seed, options=options)
        return self._register(engine)

    def restore_session(self, snapshot: dict[str, Any]) -> Session:
        """
        Rebuild a game from a saved snapshot.

        Raises ReplayDivergence if the snapshot disagrees with its own log.
        """
        engine = Engine()
        engine.from_json(snapshot)
        session = self._register(engine)
        session.refresh()
        return session

    def _register(self, engine: Engine) -> Session:
        session = Session(
            session_id=str(uuid.uuid4()),
            engine=engine,
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s started (seed %r)", session.session_id, engine.seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> Session | None:
        """Remove a session from memory."""
        session = self._sessions.pop(session_id, None)
        if session:
            if reason == "completed" or session.engine.ended:
                session.state = SessionState.GAME_OVER
            else:
                session.state = SessionState.ABANDONED
            logger.info("Session %s ended (%s)", session_id, reason)
        return session

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Drop finished sessions older than max_age.

        Called periodically to free memory.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove
