"""
Commands - What a player submits and what the engine advertises.

A Command is a move request: a move name plus optional move-specific data.
An AvailableCommand is a legal move computed by the engine for one player,
possibly parameterized with data describing the accepted values.

Both serialize to plain JSON:
    Command           {"move": "bid", "data": {"bid": 12}}
    AvailableCommand  {"move": "bid", "player": "red", "data": {"range": [12, 50]}}
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass
class Command:
    """
    A move submitted at the command boundary.

    In the log, a command is stored flattened: {"name": move, **data}.
    """
    move: str
    data: dict[str, Any] | None = None

    def __post_init__(self):
        if isinstance(self.move, Enum):
            self.move = self.move.value

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {"move": self.move}
        if self.data is not None:
            result["data"] = self.data
        return result

    def to_log_json(self) -> dict[str, Any]:
        return {**(self.data or {}), "name": self.move}

    @classmethod
    def from_log_json(cls, data: dict[str, Any]) -> Command:
        fields = dict(data)
        name = fields.pop("name")
        return cls(move=name, data=fields or None)

    @classmethod
    def auction(cls, plant: int) -> Command:
        """Factory for nominating a plant."""
        return cls(move="auction", data={"plant": plant})

    @classmethod
    def bid(cls, amount: int) -> Command:
        """Factory for a bid."""
        return cls(move="bid", data={"bid": amount})

    @classmethod
    def buy_resource(cls, resource: str, count: int) -> Command:
        """Factory for buying commodities."""
        return cls(move="buyresource", data={"resource": resource, "count": count})

    @classmethod
    def pass_(cls) -> Command:
        """Factory for passing."""
        return cls(move="pass")


@dataclass
class AvailableCommand:
    """A legal move for one player in the current state."""
    move: str
    player: str
    data: Any | None = None

    def __post_init__(self):
        if isinstance(self.move, Enum):
            self.move = self.move.value

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {"move": self.move, "player": self.player}
        if self.data is not None:
            result["data"] = self.data
        return result

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> AvailableCommand:
        return cls(move=data["move"], player=data["player"], data=data.get("data"))
