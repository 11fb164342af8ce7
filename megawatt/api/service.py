"""
API Service - Business logic layer between clients and the engine.

The service:
1. Translates requests to engine calls
2. Manages sessions
3. Turns engine exceptions into structured error responses
4. Saves and loads snapshots

This layer is framework-agnostic; any transport can wrap it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from pydantic import ValidationError

from .schemas import (
    # Requests
    CreateGameRequest,
    MoveRequest,
    # Responses
    AvailableCommandsResponse,
    ErrorResponse,
    GameStateResponse,
    MoveResponse,
    SaveGameResponse,
    SessionListResponse,
    # Shared
    AuctionInfo,
    AvailableCommandModel,
    PlantModel,
    PlayerModel,
    SnapshotModel,
    # Enums
    ErrorCode,
    GameStatus,
)
from ..engine_core import Command, IllegalMove, InvalidPlayerReference, ReplayDivergence
from ..games.powerplant import GameOptions
from ..session import Session, SessionManager, SessionState

logger = logging.getLogger(__name__)


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error="Game not found",
        error_code=ErrorCode.GAME_NOT_FOUND,
        details={"session_id": session_id},
    )


def _validation_error(exc: ValidationError) -> ErrorResponse:
    return ErrorResponse(
        error="Malformed request",
        error_code=ErrorCode.VALIDATION_ERROR,
        details={"errors": exc.errors(include_url=False, include_context=False)},
    )


@dataclass
class GameService:
    """
    Main service for game clients.

    Usage:
        service = GameService()
        state = service.create_game(CreateGameRequest(num_players=3, seed="abc"))
        response = service.submit_move(state.session_id, MoveRequest(player="red", move="pass"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_game(self, request: CreateGameRequest | dict[str, Any]) -> GameStateResponse | ErrorResponse:
        """Start a new game."""
        try:
            if isinstance(request, dict):
                request = CreateGameRequest.model_validate(request)
        except ValidationError as exc:
            return _validation_error(exc)

        defaults = GameOptions.from_env()
        options = GameOptions(
            starting_money=(
                request.starting_money if request.starting_money is not None else defaults.starting_money
            ),
            round_limit=request.round_limit if request.round_limit is not None else defaults.round_limit,
            starved_auction=request.starved_auction or defaults.starved_auction,
        )

        session = self.session_manager.create_session(
            num_players=request.num_players,
            seed=request.seed,
            options=options,
        )
        return self._build_game_state(session)

    def get_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get current game state."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._build_game_state(session)

    def available_commands(self, session_id: str) -> AvailableCommandsResponse | ErrorResponse:
        """Legal moves for whoever is on turn."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        engine = session.engine
        return AvailableCommandsResponse(
            session_id=session_id,
            current_player=engine.current_player,
            commands=[AvailableCommandModel(**c.to_json()) for c in engine.available_commands],
        )

    def submit_move(
        self,
        session_id: str,
        request: MoveRequest | dict[str, Any],
    ) -> MoveResponse | ErrorResponse:
        """
        Submit a move.

        A rejected move leaves the game untouched.
        """
        try:
            if isinstance(request, dict):
                request = MoveRequest.model_validate(request)
        except ValidationError as exc:
            return _validation_error(exc)

        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        engine = session.engine
        try:
            engine.player(request.player)
            engine.move(request.player, Command(move=request.move, data=request.data))
        except InvalidPlayerReference as exc:
            logger.warning("Move from unknown player %r in %s", exc.player_id, session_id)
            return ErrorResponse(
                error=str(exc),
                error_code=ErrorCode.INVALID_PLAYER,
                details={"player": exc.player_id},
            )
        except IllegalMove as exc:
            logger.warning("Illegal move in %s: %s", session_id, exc)
            return ErrorResponse(
                error=str(exc),
                error_code=ErrorCode.ILLEGAL_MOVE,
                details={"player": exc.player, "move": exc.move},
            )

        session.refresh()
        return MoveResponse(session_id=session_id, game_state=self._build_game_state(session))

    def save_game(self, session_id: str) -> SaveGameResponse | ErrorResponse:
        """Export a snapshot of the game."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        return SaveGameResponse(
            session_id=session_id,
            snapshot=SnapshotModel.model_validate(session.engine.to_json()),
        )

    def load_game(self, snapshot: SnapshotModel | dict[str, Any]) -> GameStateResponse | ErrorResponse:
        """Validate a snapshot and restore it as a new session by replaying its log."""
        try:
            if isinstance(snapshot, dict):
                snapshot = SnapshotModel.model_validate(snapshot)
        except ValidationError as exc:
            return _validation_error(exc)

        try:
            session = self.session_manager.restore_session(snapshot.to_engine_json())
        except ReplayDivergence as exc:
            logger.error("Snapshot rejected: %s", exc)
            return ErrorResponse(
                error=str(exc),
                error_code=ErrorCode.REPLAY_DIVERGENCE,
                details={"field": exc.field},
            )
        except InvalidPlayerReference as exc:
            logger.error("Snapshot rejected: %s", exc)
            return ErrorResponse(
                error=str(exc),
                error_code=ErrorCode.INVALID_PLAYER,
                details={"player": exc.player_id},
            )

        return self._build_game_state(session)

    def end_game(self, session_id: str) -> bool:
        """Drop a game from memory."""
        return self.session_manager.end_session(session_id, reason="user_ended") is not None

    def list_games(self) -> SessionListResponse:
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _build_game_state(self, session: Session) -> GameStateResponse:
        engine = session.engine
        board = engine.board

        auction = None
        if engine.auction:
            auction = AuctionInfo(
                plant=PlantModel(**engine.auction.plant.to_json()),
                participants=list(engine.auction.participants),
                current=engine.auction.current,
                bid=engine.auction.bid,
            )

        return GameStateResponse(
            session_id=session.session_id,
            status=self._session_state_to_status(session),
            round=engine.round,
            phase=engine.phase_key,
            major_phase=engine.major_phase.value,
            turnorder=list(engine.turnorder),
            current_player=engine.current_player,
            auction=auction,
            market=[PlantModel(**p.to_json()) for p in board.market.current.plants],
            future_market=[PlantModel(**p.to_json()) for p in board.market.future.plants],
            players=[PlayerModel.model_validate(p.to_json()) for p in engine.players.values()],
            available_commands=[AvailableCommandModel(**c.to_json()) for c in engine.available_commands],
            log_length=len(engine.log),
        )

    def _session_state_to_status(self, session: Session) -> GameStatus:
        mapping = {
            SessionState.ACTIVE: GameStatus.ACTIVE,
            SessionState.GAME_OVER: GameStatus.GAME_OVER,
            SessionState.ABANDONED: GameStatus.ABANDONED,
        }
        return mapping.get(session.state, GameStatus.ACTIVE)
