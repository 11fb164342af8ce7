"""
Base Engine - Event log, replay and move dispatch shared by all games.

The engine is the single writer of game state:
- add_log() appends an item and applies it immediately
- process_log_item() is the only path that changes state
- move() validates a command against the cached available set,
  logs it, runs its exec handler and regenerates the available set
- replay() re-applies a log with phase hooks suppressed

Concrete games provide the command registry, the event handler table,
the current phase and the current player.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Iterable

from .action import AvailableCommand, Command
from .action_generator import ActionGenerator
from .commands import CommandRegistry
from .errors import IllegalMove, InvalidPlayerReference, ReplayDivergence
from .log import GameEvent, LogItem
from .random_source import RandomSource

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any, GameEvent], None]


class BaseEngine:
    """
    Generic replayable game-state machine.

    Subclasses set `commands` and `event_handlers` and implement
    `phase_key` and `current_player`.
    """

    commands: CommandRegistry = {}
    event_handlers: dict[str, EventHandler] = {}

    def __init__(self):
        self._seed = ""
        self._rng: RandomSource | None = None
        self._generator = ActionGenerator(registry=self.commands)
        self.reset()

    def reset(self) -> None:
        """Drop all game state, keeping the seed."""
        self.log: list[LogItem] = []
        self.round = 0
        self.players: dict[str, Any] = {}
        self.available_commands: list[AvailableCommand] = []
        self.ended = False
        self.replaying = False
        self._rng = None

    # =========================================================================
    # Randomness
    # =========================================================================

    @property
    def seed(self) -> str:
        return self._seed

    @seed.setter
    def seed(self, new_seed: str) -> None:
        self._seed = new_seed
        self._rng = None

    @property
    def rng(self) -> RandomSource:
        if self._rng is None:
            self._rng = RandomSource(self._seed)
        return self._rng

    # =========================================================================
    # Hooks for concrete games
    # =========================================================================

    @property
    def phase_key(self) -> str | None:
        """Key of the active phase in the command registry."""
        raise NotImplementedError

    @property
    def current_player(self) -> str | None:
        """Id of the player whose turn it is."""
        raise NotImplementedError

    # =========================================================================
    # Players
    # =========================================================================

    def player(self, player_id: str) -> Any:
        """Look up a player by id; the players dict is the index."""
        try:
            return self.players[player_id]
        except KeyError:
            raise InvalidPlayerReference(player_id) from None

    # =========================================================================
    # Log
    # =========================================================================

    def add_log(self, item: LogItem) -> None:
        """Append an item and apply it. Append and apply happen together."""
        self.log.append(item)
        self.process_log_item(item)

    def process_log_item(self, item: LogItem) -> None:
        """
        Change state by applying one log item.

        Events dispatch through `event_handlers`; moves are history records
        whose effects arrive as the events their exec handler logged.
        Unknown event names and item kinds are ignored.
        """
        if item.is_event:
            handler = self.event_handlers.get(item.event.name)
            if handler is None:
                logger.debug("Ignoring unknown event %r", item.event.name)
                return
            logger.debug("Applying event %s", item.event.to_json())
            handler(self, item.event)
        elif item.is_move:
            logger.debug("Recorded move %s by %s", item.move.to_log_json(), item.player)
        else:
            logger.debug("Ignoring unknown log item kind %r", item.kind)

    def replay(self, items: Iterable[LogItem]) -> None:
        """
        Apply a sequence of log items in order.

        Phase hooks check `replaying` and stay silent, so one-time effects
        recorded in the log are not triggered a second time.
        """
        self.replaying = True
        try:
            for item in items:
                self.add_log(item)
        finally:
            self.replaying = False
        self.generate_available_commands()

    # =========================================================================
    # Commands
    # =========================================================================

    def generate_available_commands(self) -> list[AvailableCommand]:
        """Recompute the available command set from current state."""
        self.available_commands = self._generator.generate(self)
        return self.available_commands

    def move(self, player_id: str, command: Command) -> None:
        """
        Submit a move.

        Raises IllegalMove without touching state if the command does not
        match the available set. On success the move is logged, executed
        and the available set is regenerated.
        """
        if self.ended:
            raise IllegalMove("The game is over", player=player_id, move=command.move)

        error = self._generator.match(self, self.available_commands, player_id, command)
        if error:
            logger.debug("Rejected %s from %s: %s", command.to_json(), player_id, error)
            raise IllegalMove(error, player=player_id, move=command.move)

        spec = self._generator.spec_for(self, command.move)
        player = self.player(player_id)

        self.add_log(LogItem.of_move(player_id, command))
        spec.exec(self, player, command.data)

        if self.ended:
            self.available_commands = []
        else:
            self.generate_available_commands()

    # =========================================================================
    # Snapshot
    # =========================================================================

    def to_json(self) -> dict[str, Any]:
        """Serialize to the snapshot layout."""
        return {
            "log": [item.to_json() for item in self.log],
            "round": self.round,
            "seed": self.seed,
            "rngState": self.rng.state(),
            "players": [player.to_json() for player in self.players.values()],
            "phase": self.phase_key,
            "availableCommands": [command.to_json() for command in self.available_commands],
        }

    def from_json(self, data: dict[str, Any]) -> None:
        """
        Restore from a snapshot by replaying its log from the seed.

        The recorded round, phase, players and available commands must match
        the replayed state, otherwise ReplayDivergence is raised. So does a
        log whose items cannot be applied.
        """
        self.reset()
        self.seed = data["seed"]
        try:
            self.replay(LogItem.from_json(item) for item in data["log"])
        except (ReplayDivergence, InvalidPlayerReference):
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Snapshot log cannot be replayed: %r", exc)
            raise ReplayDivergence(f"Log cannot be replayed: {exc!r}", field="log") from exc

        self._check_restored("round", self.round, data.get("round"))
        self._check_restored("phase", self.phase_key, data.get("phase"))
        self._check_restored(
            "players",
            [player.to_json() for player in self.players.values()],
            data.get("players"),
        )
        self._check_restored(
            "availableCommands",
            [command.to_json() for command in self.available_commands],
            data.get("availableCommands"),
        )

        if data.get("rngState") is not None:
            self.rng.set_state(data["rngState"])

    def _check_restored(self, field: str, replayed: Any, recorded: Any) -> None:
        if recorded is None or replayed == recorded:
            return
        logger.error("Snapshot %s diverges from replay: %r != %r", field, replayed, recorded)
        raise ReplayDivergence(f"Replayed {field} does not match snapshot", field=field)
