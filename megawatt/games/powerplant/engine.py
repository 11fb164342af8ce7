"""
Power plant engine - Phase state machine on top of the replayable base.

Owns the round structure:
    RoundStart -> PlantAuction -> CommoditiesTrading -> Construction
    -> Bureaucracy -> RoundStart ...

Turn order is walked forwards in PlantAuction and Bureaucracy and
backwards in the other two phases. Walking off either end closes the
phase. While an auction is open the bidder on turn is the current player.
"""

from __future__ import annotations
import logging
from typing import Any

from ... import config
from ...engine_core import AvailableCommand, BaseEngine, LogItem
from .auction import AuctionState
from .board import Board
from .commands import COMMANDS
from .enums import GameEventName, MajorPhase, RoundPhase
from .options import GameOptions
from .phases import ASCENDING, NEXT_PHASE, run_ended, run_started
from .player import Player
from .reducer import EVENT_HANDLERS

logger = logging.getLogger(__name__)


class Engine(BaseEngine):
    """
    Usage:
        engine = Engine()
        engine.init(2, "seed")
        engine.move("red", Command.auction(4))
    """

    commands = COMMANDS
    event_handlers = EVENT_HANDLERS

    def reset(self) -> None:
        super().reset()
        self.players: dict[str, Player] = {}
        self.turnorder: list[str] = []
        self.phase: RoundPhase | None = None
        self.major_phase: MajorPhase = MajorPhase.STEP1
        self.auction: AuctionState | None = None
        self.board: Board | None = None
        self.options = GameOptions()
        self._current_player: str | None = None

    def init(self, players: int, seed: str, options: GameOptions | None = None) -> None:
        """Start a new game. Every setup step is logged."""
        if not config.MIN_PLAYERS <= players <= config.MAX_PLAYERS:
            raise ValueError(
                f"Player count must be between {config.MIN_PLAYERS} and {config.MAX_PLAYERS}, got {players}"
            )
        options = options or GameOptions.from_env()

        self.reset()
        self.seed = seed

        self.add_log(LogItem.of_event(GameEventName.GAME_START, players=players, options=options.to_json()))
        self.add_log(LogItem.of_event(GameEventName.TURN_ORDER, turnorder=list(self.turnorder)))
        self.add_log(LogItem.of_event(GameEventName.MAJOR_PHASE_CHANGE, phase=MajorPhase.STEP1.value))
        self.start_round()

        self.generate_available_commands()

    # =========================================================================
    # Turn state
    # =========================================================================

    @property
    def phase_key(self) -> str | None:
        return self.phase.value if self.phase else None

    @property
    def current_player(self) -> str | None:
        if self.auction is not None:
            return self.auction.current
        return self._current_player

    def set_turn(self, player_id: str) -> None:
        """Move the phase turn pointer. Only the CurrentPlayer event calls this."""
        self._current_player = player_id

    # =========================================================================
    # Progression
    # =========================================================================

    def start_round(self) -> None:
        self.add_log(LogItem.of_event(GameEventName.ROUND_START, round=self.round + 1))
        if self.round > 1:
            self.add_log(LogItem.of_event(GameEventName.TURN_ORDER, turnorder=self.ranked_turnorder()))
        self.begin_phase(RoundPhase.PLANT_AUCTION)

    def ranked_turnorder(self) -> list[str]:
        """Most cities first, then highest plant. Ties keep the current order."""
        return sorted(
            self.turnorder,
            key=lambda player_id: (
                len(self.players[player_id].cities),
                self.players[player_id].highest_plant(),
            ),
            reverse=True,
        )

    def begin_phase(self, phase: RoundPhase) -> None:
        self.add_log(LogItem.of_event(GameEventName.PHASE_CHANGE, phase=phase.value))
        run_started(self, phase)

    def end_phase(self) -> None:
        """Close the current phase and open its successor."""
        run_ended(self, self.phase)
        if self.ended:
            return

        successor = NEXT_PHASE[self.phase]
        if successor is None:
            self.start_round()
        else:
            self.begin_phase(successor)

    def switch_to_next_player(self) -> None:
        """
        Hand the turn to the next player in this phase's direction.

        In PlantAuction players who already bought a plant are skipped.
        Walking past either end of the turn order ends the phase.
        """
        step = 1 if self.phase in ASCENDING else -1
        index = self.turnorder.index(self._current_player)

        while True:
            index += step
            if index < 0 or index >= len(self.turnorder):
                self.end_phase()
                return

            player_id = self.turnorder[index]
            if self.phase == RoundPhase.PLANT_AUCTION and self.players[player_id].acquired_plant:
                continue

            self.add_log(LogItem.of_event(GameEventName.CURRENT_PLAYER, player=player_id))
            return

    def generate_available_commands(self) -> list[AvailableCommand]:
        commands = super().generate_available_commands()

        # A starved nominator under the "skip" policy has nothing to do; move on
        while (
            not commands
            and not self.ended
            and not self.replaying
            and self.options.starved_auction == "skip"
            and self.phase == RoundPhase.PLANT_AUCTION
            and self.auction is None
            and self._current_player is not None
        ):
            logger.info("Skipping %s, no plant is affordable", self._current_player)
            self.switch_to_next_player()
            commands = super().generate_available_commands()

        return commands

    # =========================================================================
    # Views
    # =========================================================================

    def state_json(self) -> dict[str, Any]:
        """Full derived state, for display and for comparing replays."""
        return {
            "round": self.round,
            "phase": self.phase_key,
            "majorPhase": self.major_phase.value,
            "turnorder": list(self.turnorder),
            "currentPlayer": self.current_player,
            "auction": self.auction.to_json() if self.auction else None,
            "board": self.board.to_json() if self.board else None,
            "players": [player.to_json() for player in self.players.values()],
            "ended": self.ended,
        }
