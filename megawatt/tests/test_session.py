"""
Tests for the session manager.
"""

import pytest

from ..engine_core import ReplayDivergence
from ..session import SessionManager, SessionState
from .helpers import play_round


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager()


class TestSessionLifecycle:
    def test_create(self, manager, options):
        session = manager.create_session(num_players=3, seed="s", options=options)
        assert session.is_active()
        assert session.engine.seed == "s"
        assert len(session.engine.players) == 3
        assert manager.get_session(session.session_id) is session

    def test_generated_seed(self, manager, options):
        session = manager.create_session(options=options)
        assert session.engine.seed

    def test_invalid_player_count(self, manager, options):
        with pytest.raises(ValueError):
            manager.create_session(num_players=7, options=options)

    def test_end_session(self, manager, options):
        session = manager.create_session(options=options)
        ended = manager.end_session(session.session_id, reason="user_ended")
        assert ended is session
        assert ended.state == SessionState.ABANDONED
        assert manager.get_session(session.session_id) is None
        assert manager.end_session(session.session_id) is None

    def test_list_active(self, manager, options):
        a = manager.create_session(options=options)
        b = manager.create_session(options=options)
        b.state = SessionState.GAME_OVER
        assert manager.list_active_sessions() == [a.session_id]

    def test_cleanup_stale(self, manager, options):
        active = manager.create_session(options=options)
        finished = manager.create_session(options=options)
        finished.state = SessionState.GAME_OVER
        active.created_at = finished.created_at = 0

        assert manager.cleanup_stale_sessions(max_age_seconds=60) == [finished.session_id]
        assert manager.get_session(active.session_id) is active


class TestRestore:
    def test_restore_continues(self, manager, options):
        session = manager.create_session(seed="restore", options=options)
        play_round(session.engine)

        restored = manager.restore_session(session.engine.to_json())
        assert restored.session_id != session.session_id
        assert restored.engine.state_json() == session.engine.state_json()
        assert restored.is_active()

    def test_restore_divergent(self, manager, options):
        session = manager.create_session(seed="restore", options=options)
        snapshot = session.engine.to_json()
        snapshot["round"] = 4

        with pytest.raises(ReplayDivergence):
            manager.restore_session(snapshot)
        assert manager.list_active_sessions() == [session.session_id]
