"""
Tests for the API service.

Tests:
- Game creation and state
- Move submission and error mapping
- Save and load through snapshots
"""

from ..api.schemas import (
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameStatus,
    MoveRequest,
)


def create(service, **kwargs):
    kwargs.setdefault("seed", "service")
    return service.create_game(CreateGameRequest(**kwargs))


class TestCreateGame:
    """Starting games through the service."""

    def test_create(self, service):
        state = create(service, num_players=3)
        assert state.status == GameStatus.ACTIVE
        assert state.round == 1
        assert state.phase == "plantauction"
        assert len(state.players) == 3
        assert state.current_player == state.turnorder[0]
        assert [p.price for p in state.market] == [3, 4, 5, 6]
        assert state.available_commands[0].move == "auction"

    def test_create_from_dict(self, service):
        state = service.create_game({"num_players": 2, "seed": "x", "starting_money": 20})
        assert all(p.money == 20 for p in state.players)

    def test_create_rejects_bad_dict(self, service):
        response = service.create_game({"num_players": 9})
        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_same_seed_same_order(self, service):
        assert create(service).turnorder == create(service).turnorder

    def test_unknown_game(self, service):
        response = service.get_state("missing")
        assert response.error_code == ErrorCode.GAME_NOT_FOUND
        assert service.available_commands("missing").error_code == ErrorCode.GAME_NOT_FOUND
        assert service.save_game("missing").error_code == ErrorCode.GAME_NOT_FOUND


class TestSubmitMove:
    """Moves and their errors."""

    def test_accepted_move(self, service):
        state = create(service)
        first = state.current_player

        response = service.submit_move(
            state.session_id, MoveRequest(player=first, move="auction", data={"plant": 3})
        )
        assert response.success
        assert response.game_state.auction.plant.price == 3
        assert response.game_state.log_length == state.log_length + 2

    def test_illegal_move(self, service):
        state = create(service)
        response = service.submit_move(
            state.session_id, {"player": state.current_player, "move": "bid", "data": {"bid": 3}}
        )
        assert response.error_code == ErrorCode.ILLEGAL_MOVE
        assert response.details["move"] == "bid"
        assert service.get_state(state.session_id).log_length == state.log_length

    def test_unknown_player(self, service):
        state = create(service)
        response = service.submit_move(state.session_id, {"player": "orange", "move": "pass"})
        assert response.error_code == ErrorCode.INVALID_PLAYER

    def test_malformed_move(self, service):
        state = create(service)
        response = service.submit_move(state.session_id, {"move": "pass"})
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_available_commands(self, service):
        state = create(service)
        response = service.available_commands(state.session_id)
        assert response.current_player == state.current_player
        assert response.commands[0].data == {"plants": [3, 4, 5, 6]}


class TestSaveLoad:
    """Snapshots through the service."""

    def test_round_trip(self, service):
        state = create(service)
        first = state.current_player
        service.submit_move(state.session_id, MoveRequest(player=first, move="auction", data={"plant": 4}))

        saved = service.save_game(state.session_id)
        loaded = service.load_game(saved.snapshot.model_dump(by_alias=True))

        original = service.get_state(state.session_id)
        assert loaded.session_id != state.session_id
        assert loaded.current_player == original.current_player
        assert loaded.auction == original.auction
        assert loaded.available_commands == original.available_commands
        assert loaded.players == original.players

    def test_load_divergent(self, service):
        state = create(service)
        snapshot = service.save_game(state.session_id).snapshot.model_dump(by_alias=True)
        snapshot["players"][0]["money"] = 1

        response = service.load_game(snapshot)
        assert response.error_code == ErrorCode.REPLAY_DIVERGENCE
        assert response.details["field"] == "players"

    def test_load_malformed(self, service):
        response = service.load_game({"log": [{"kind": "move"}], "round": 0, "seed": "x"})
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_load_unreplayable_payload(self, service):
        """A well-formed log item whose event payload is incomplete is rejected."""
        response = service.load_game({
            "log": [{"kind": "event", "event": {"name": "roundstart"}}],
            "round": 0,
            "seed": "x",
        })
        assert response.error_code == ErrorCode.REPLAY_DIVERGENCE
        assert response.details["field"] == "log"
        assert service.list_games().count == 0

    def test_load_without_game_start(self, service):
        """Board events before any game start are rejected."""
        response = service.load_game({
            "log": [{"kind": "event", "event": {"name": "majorphasechange", "phase": "step3"}}],
            "round": 0,
            "seed": "x",
        })
        assert response.error_code == ErrorCode.REPLAY_DIVERGENCE
        assert response.details["field"] == "log"

    def test_end_and_list(self, service):
        a = create(service)
        b = create(service)
        assert service.list_games().count == 2
        assert service.end_game(a.session_id)
        assert service.list_games().sessions == [b.session_id]
        assert not service.end_game(a.session_id)
