"""
Log Items - The append-only history of a game.

A log item is either:
- an event:  {"kind": "event", "event": {"name": ..., **payload}}
- a move:    {"kind": "move", "player": ..., "move": {"name": ..., **data}}

The log is the sole source of truth. Every derived field of the game state
can be rebuilt by folding the log from the initial seed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .action import Command


@dataclass
class GameEvent:
    """A named event with a JSON-compatible payload."""
    name: str
    payload: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def to_json(self) -> dict[str, Any]:
        return {"name": self.name, **self.payload}

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> GameEvent:
        payload = dict(data)
        name = payload.pop("name")
        return cls(name=name, payload=payload)


@dataclass
class LogItem:
    """One atomic, replayable unit of game history."""
    kind: str  # "event" or "move"
    event: GameEvent | None = None
    player: str | None = None
    move: Command | None = None
    raw: dict[str, Any] | None = None  # unknown kinds, kept verbatim

    @classmethod
    def of_event(cls, name: str | Enum, **payload: Any) -> LogItem:
        """Factory for an event item."""
        if isinstance(name, Enum):
            name = name.value
        return cls(kind="event", event=GameEvent(name=name, payload=payload))

    @classmethod
    def of_move(cls, player: str, command: Command) -> LogItem:
        """Factory for a move item."""
        return cls(kind="move", player=player, move=command)

    @property
    def is_event(self) -> bool:
        return self.kind == "event"

    @property
    def is_move(self) -> bool:
        return self.kind == "move"

    def to_json(self) -> dict[str, Any]:
        if self.is_event:
            return {"kind": "event", "event": self.event.to_json()}
        if self.is_move:
            return {"kind": "move", "player": self.player, "move": self.move.to_log_json()}
        return dict(self.raw or {"kind": self.kind})

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> LogItem:
        kind = data["kind"]
        if kind == "event":
            return cls(kind=kind, event=GameEvent.from_json(data["event"]))
        if kind == "move":
            return cls(kind=kind, player=data["player"], move=Command.from_log_json(data["move"]))
        # Unknown kinds are kept so that they survive a save/load round trip
        return cls(kind=kind, raw=dict(data))
