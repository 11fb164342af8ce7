"""
Command Registry - Declarative per-phase, per-move handler table.

The registry maps phase -> move name -> CommandSpec. Each spec has:
- available(engine, player): False | True | data | [data, ...]
    False means illegal now, True means legal without data, a value or a
    list of values means legal and parameterized. Missing means always legal.
- valid(move_data, available_data): does submitted data match one entry?
    Missing means the submitted data must equal the advertised entry.
- exec(engine, player, data): the only place a move changes state, always
    by appending events to the log.

Handlers receive the engine explicitly; no engine subclass overrides them.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .base_engine import BaseEngine

AvailableFn = Callable[["BaseEngine", Any], Any]
ValidFn = Callable[[Any, Any], bool]
ExecFn = Callable[["BaseEngine", Any, Any], None]


@dataclass(frozen=True)
class CommandSpec:
    """Handlers for one move in one phase."""
    exec: ExecFn
    available: AvailableFn | None = None
    valid: ValidFn | None = None

    def availability(self, engine: BaseEngine, player: Any) -> Any:
        if self.available is None:
            return True
        return self.available(engine, player)

    def accepts(self, data: Any, available_data: Any) -> bool:
        if self.valid is None:
            return data == available_data
        return bool(self.valid(data, available_data))


CommandRegistry = dict[str, dict[str, CommandSpec]]


def _key(value: Any) -> str:
    return value.value if isinstance(value, Enum) else value


def build_registry(table: dict[Any, dict[Any, CommandSpec]]) -> CommandRegistry:
    """Normalize enum keys of a handler table to their string values."""
    return {
        _key(phase): {_key(move): spec for move, spec in moves.items()}
        for phase, moves in table.items()
    }
