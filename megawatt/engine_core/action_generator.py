"""
Availability Engine - Generates all legal commands from a game state.

The generated set is used by:
1. Players and bots to enumerate possible moves
2. The engine itself to accept or reject submitted moves

The set is always recomputed from scratch after every mutation, never
patched, so legality checks and execution cannot disagree.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from .action import AvailableCommand, Command
from .commands import CommandRegistry, CommandSpec

if TYPE_CHECKING:
    from .base_engine import BaseEngine


def expand_available(move: str, player: str, available: Any) -> list[AvailableCommand]:
    """
    Turn the result of an `available` handler into commands.

    True -> one command without data; list -> one command per element;
    any other truthy value -> one command carrying it as data.
    """
    if available is None or available is False:
        return []
    if available is True:
        return [AvailableCommand(move=move, player=player)]
    if isinstance(available, list):
        return [AvailableCommand(move=move, player=player, data=item) for item in available]
    return [AvailableCommand(move=move, player=player, data=available)]


@dataclass
class ActionGenerator:
    """
    Generates legal commands for the current player of an engine.

    Uses the engine's command registry for the active phase.
    """
    registry: CommandRegistry

    def generate(self, engine: BaseEngine) -> list[AvailableCommand]:
        """
        Generate all available commands for the current player.

        Order follows the registration order of moves in the phase table.
        """
        if engine.ended:
            return []

        player_id = engine.current_player
        if player_id is None:
            return []

        player = engine.player(player_id)
        commands = []
        for move, spec in self.registry.get(engine.phase_key, {}).items():
            commands.extend(expand_available(move, player_id, spec.availability(engine, player)))
        return commands

    def spec_for(self, engine: BaseEngine, move: str) -> CommandSpec | None:
        return self.registry.get(engine.phase_key, {}).get(move)

    def match(
        self,
        engine: BaseEngine,
        available: list[AvailableCommand],
        player: str,
        command: Command,
    ) -> str | None:
        """
        Check a submitted command against the advertised set.

        Returns an error message if the command is rejected, None if accepted.
        """
        candidates = [c for c in available if c.player == player and c.move == command.move]
        if not candidates:
            return f"{command.move!r} is not available for {player!r}"

        spec = self.spec_for(engine, command.move)
        if spec is None:
            return f"No handler for {command.move!r} in phase {engine.phase_key!r}"

        if isinstance(command.data, dict) and "name" in command.data:
            return f"'name' is reserved in data for {command.move!r}"

        advertised = [c.data for c in candidates if c.data is not None]
        if not advertised:
            if command.data:
                return f"{command.move!r} takes no data"
            return None

        if command.data is None:
            return f"{command.move!r} requires data"

        for entry in advertised:
            if spec.accepts(command.data, entry):
                return None
        return f"Invalid data for {command.move!r}: {command.data!r}"


def legal_commands(engine: BaseEngine) -> list[AvailableCommand]:
    """
    Convenience function to compute available commands without caching them.
    """
    return ActionGenerator(registry=engine.commands).generate(engine)


def is_legal(engine: BaseEngine, player: str, command: Command) -> bool:
    """Check if a specific command would currently be accepted."""
    generator = ActionGenerator(registry=engine.commands)
    return generator.match(engine, engine.available_commands, player, command) is None
