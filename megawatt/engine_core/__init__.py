"""
Engine Core - Deterministic, replayable game state machine.

The engine core is the game-agnostic runtime that:
1. Seeds a RandomSource
2. Appends LogItems and applies them through event handlers
3. Generates available commands from a per-phase registry
4. Validates and executes moves
5. Saves and restores snapshots by replaying the log
"""

from .random_source import RandomSource, shuffle
from .errors import EngineError, IllegalMove, InvalidPlayerReference, ReplayDivergence
from .action import Command, AvailableCommand
from .log import GameEvent, LogItem
from .commands import CommandSpec, CommandRegistry, build_registry
from .action_generator import ActionGenerator, expand_available, legal_commands, is_legal
from .base_engine import BaseEngine

__all__ = [
    "RandomSource",
    "shuffle",
    "EngineError",
    "IllegalMove",
    "InvalidPlayerReference",
    "ReplayDivergence",
    "Command",
    "AvailableCommand",
    "GameEvent",
    "LogItem",
    "CommandSpec",
    "CommandRegistry",
    "build_registry",
    "ActionGenerator",
    "expand_available",
    "legal_commands",
    "is_legal",
    "BaseEngine",
]
