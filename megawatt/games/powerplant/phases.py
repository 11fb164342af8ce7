"""
Phase hooks - What happens when a round phase starts or ends.

`started` picks the player who opens the phase. `ended` handles the
bookkeeping that closes it (step changes, game end, market refill).
Hooks only append events; they never run while the engine replays.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

from ...engine_core import LogItem
from .board import END_CITIES, STEP2_CITIES, plan_to_json
from .enums import GameEventName, MajorPhase, RoundPhase

if TYPE_CHECKING:
    from .engine import Engine

Hook = Callable[["Engine"], None]

# Successor of each phase within a round; Bureaucracy wraps to a new round
NEXT_PHASE = {
    RoundPhase.PLANT_AUCTION: RoundPhase.COMMODITIES_TRADING,
    RoundPhase.COMMODITIES_TRADING: RoundPhase.CONSTRUCTION,
    RoundPhase.CONSTRUCTION: RoundPhase.BUREAUCRACY,
    RoundPhase.BUREAUCRACY: None,
}

# Phases walked from first to last in turn order; the others go backwards
ASCENDING = {RoundPhase.PLANT_AUCTION, RoundPhase.BUREAUCRACY}


@dataclass(frozen=True)
class PhaseHooks:
    started: Hook | None = None
    ended: Hook | None = None


def _first_player_starts(engine: Engine) -> None:
    engine.add_log(LogItem.of_event(GameEventName.CURRENT_PLAYER, player=engine.turnorder[0]))


def _last_player_starts(engine: Engine) -> None:
    engine.add_log(LogItem.of_event(GameEventName.CURRENT_PLAYER, player=engine.turnorder[-1]))


def _most_cities(engine: Engine) -> int:
    return max((len(player.cities) for player in engine.players.values()), default=0)


def _construction_ended(engine: Engine) -> None:
    if engine.major_phase != MajorPhase.STEP1:
        return
    if _most_cities(engine) >= STEP2_CITIES[len(engine.players)]:
        engine.add_log(LogItem.of_event(GameEventName.MAJOR_PHASE_CHANGE, phase=MajorPhase.STEP2.value))


def _bureaucracy_ended(engine: Engine) -> None:
    limit = engine.options.round_limit
    if (limit and engine.round >= limit) or _most_cities(engine) >= END_CITIES[len(engine.players)]:
        engine.add_log(LogItem.of_event(GameEventName.GAME_END))
        return

    plan = engine.board.refill_resources(len(engine.players), engine.major_phase)
    engine.add_log(LogItem.of_event(GameEventName.FILL_RESOURCES, resources=plan_to_json(plan)))


PHASE_HOOKS: dict[RoundPhase, PhaseHooks] = {
    RoundPhase.PLANT_AUCTION: PhaseHooks(started=_first_player_starts),
    RoundPhase.COMMODITIES_TRADING: PhaseHooks(started=_last_player_starts),
    RoundPhase.CONSTRUCTION: PhaseHooks(started=_last_player_starts, ended=_construction_ended),
    RoundPhase.BUREAUCRACY: PhaseHooks(started=_first_player_starts, ended=_bureaucracy_ended),
}


def run_started(engine: Engine, phase: RoundPhase) -> None:
    if engine.replaying:
        return
    hook = PHASE_HOOKS[phase].started
    if hook:
        hook(engine)


def run_ended(engine: Engine, phase: RoundPhase) -> None:
    if engine.replaying:
        return
    hook = PHASE_HOOKS[phase].ended
    if hook:
        hook(engine)
