"""
API Module - Client interface.

Exposes the engine through a transport-agnostic service:
1. Create a game
2. Read the state and the legal moves
3. Submit moves
4. Save and load snapshots

All state is session-scoped.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    MoveRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    AvailableCommandsResponse,
    SaveGameResponse,
    SessionListResponse,
    ErrorResponse,
    # Shared
    SnapshotModel,
    LogItemModel,
    PlayerModel,
    AvailableCommandModel,
    # Enums
    ErrorCode,
    GameStatus,
)
from .service import GameService

__all__ = [
    # Requests
    "CreateGameRequest",
    "MoveRequest",
    # Responses
    "GameStateResponse",
    "MoveResponse",
    "AvailableCommandsResponse",
    "SaveGameResponse",
    "SessionListResponse",
    "ErrorResponse",
    # Shared
    "SnapshotModel",
    "LogItemModel",
    "PlayerModel",
    "AvailableCommandModel",
    # Enums
    "ErrorCode",
    "GameStatus",
    # Service
    "GameService",
]
