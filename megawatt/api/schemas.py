"""
Pydantic Schemas for API - Request/response and snapshot models.

These models define the contract between a client and the engine. The
snapshot and log item models mirror the engine's JSON layout exactly, so a
saved game can be validated before it is replayed.

Error Codes:
- ILLEGAL_MOVE: The move is not available, or its data is out of range
- INVALID_PLAYER: The player id does not belong to the game
- REPLAY_DIVERGENCE: A snapshot disagrees with the state its log rebuilds
- GAME_NOT_FOUND: Session does not exist or has been dropped
- VALIDATION_ERROR: The request or snapshot is malformed
"""

from enum import Enum
from typing import Optional, Any, Literal
from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    INVALID_PLAYER = "INVALID_PLAYER"
    REPLAY_DIVERGENCE = "REPLAY_DIVERGENCE"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Log and Snapshot Models
# =============================================================================

class EventModel(BaseModel):
    """A game event: a name plus event-specific fields."""
    name: str

    model_config = {"extra": "allow"}


class MoveModel(BaseModel):
    """A logged move: the move name plus its data, flattened."""
    name: str

    model_config = {"extra": "allow"}


class LogItemModel(BaseModel):
    """
    One log item.

    Events carry `event`; moves carry `player` and `move`. Other kinds are
    accepted as-is so newer logs still load.
    """
    kind: str
    event: Optional[EventModel] = None
    player: Optional[str] = None
    move: Optional[MoveModel] = None

    model_config = {"extra": "allow"}

    @model_validator(mode="after")
    def check_kind(self):
        if self.kind == "event" and self.event is None:
            raise ValueError("event log item requires 'event'")
        if self.kind == "move" and (self.player is None or self.move is None):
            raise ValueError("move log item requires 'player' and 'move'")
        return self


class PlantModel(BaseModel):
    price: int = Field(..., ge=1)
    energy: list[str] = Field(default_factory=list, max_length=2)
    intake: int = Field(..., ge=0)
    output: int = Field(..., ge=0)


class PlayerModel(BaseModel):
    """Per-player state as stored in a snapshot."""
    color: str
    money: int = Field(..., ge=0)
    resources: dict[str, int] = Field(default_factory=dict)
    plants: list[PlantModel] = Field(default_factory=list)
    cities: list[str] = Field(default_factory=list)
    acquired_plant: bool = Field(False, alias="acquiredPlant")

    model_config = {"populate_by_name": True}


class AvailableCommandModel(BaseModel):
    """A legal move for one player, possibly parameterized by `data`."""
    move: str
    player: str
    data: Optional[Any] = None


class SnapshotModel(BaseModel):
    """
    A saved game.

    Restoring replays `log` from `seed`; the other fields are checked
    against the replayed state.
    """
    log: list[LogItemModel]
    round: int = Field(..., ge=0)
    seed: str
    rng_state: Optional[list[Any]] = Field(None, alias="rngState")
    players: list[PlayerModel] = Field(default_factory=list)
    phase: Optional[str] = None
    available_commands: list[AvailableCommandModel] = Field(
        default_factory=list, alias="availableCommands"
    )

    model_config = {"populate_by_name": True}

    def to_engine_json(self) -> dict[str, Any]:
        """Dump in the engine's own key layout."""
        data = self.model_dump(by_alias=True)
        data["log"] = [item.model_dump(exclude_none=True) for item in self.log]
        data["availableCommands"] = [
            command.model_dump(exclude_none=True) for command in self.available_commands
        ]
        return data


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    num_players: int = Field(2, ge=2, le=6, description="Number of players")
    seed: Optional[str] = Field(None, description="Seed for reproducible games")
    starting_money: Optional[int] = Field(None, ge=0, description="Money each player starts with")
    round_limit: Optional[int] = Field(None, ge=0, description="End the game after this round, 0 for no limit")
    starved_auction: Optional[Literal["pass", "skip"]] = Field(
        None, description="What to do when a player cannot afford any plant in round 1"
    )


class MoveRequest(BaseModel):
    """A move submitted by a player."""
    player: str = Field(..., description="Player color")
    move: str = Field(..., description="pass, auction, bid, buyresource")
    data: Optional[dict[str, Any]] = Field(None, description="Move-specific data")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class AuctionInfo(BaseModel):
    plant: PlantModel
    participants: list[str]
    current: str
    bid: Optional[int] = None


class GameStateResponse(BaseModel):
    """Game state for display."""
    session_id: str
    status: GameStatus
    round: int
    phase: Optional[str] = None
    major_phase: str
    turnorder: list[str] = Field(default_factory=list)
    current_player: Optional[str] = None
    auction: Optional[AuctionInfo] = None
    market: list[PlantModel] = Field(default_factory=list, description="Plants open for nomination")
    future_market: list[PlantModel] = Field(default_factory=list)
    players: list[PlayerModel] = Field(default_factory=list)
    available_commands: list[AvailableCommandModel] = Field(default_factory=list)
    log_length: int = 0
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Response after an accepted move."""
    session_id: str
    success: bool = True
    game_state: GameStateResponse
    api_version: str = "v1"


class AvailableCommandsResponse(BaseModel):
    session_id: str
    current_player: Optional[str] = None
    commands: list[AvailableCommandModel] = Field(default_factory=list)
    api_version: str = "v1"


class SaveGameResponse(BaseModel):
    """A snapshot of a running game."""
    session_id: str
    snapshot: SnapshotModel
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int
