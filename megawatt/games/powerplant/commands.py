"""
Command table - Which moves exist in each phase and what they do.

Layout: phase -> move -> CommandSpec(exec, available, valid).
`available` and `valid` are pure; `exec` only appends events to the log
and drives turn progression through the engine.
"""

from __future__ import annotations
from typing import Any, TYPE_CHECKING

from ...engine_core import CommandSpec, LogItem, build_registry
from .enums import GameEventName, MajorPhase, MoveName, Resource, RoundPhase
from .player import Player

if TYPE_CHECKING:
    from .engine import Engine


def _is_int(value: Any) -> bool:
    """Whole numbers, including integral floats sent by JSON clients."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int)


def _affordable_plants(engine: Engine, player: Player) -> list[int]:
    return [
        plant.price for plant in engine.board.market.current.plants
        if plant.price <= player.money
    ]


# =============================================================================
# Plant auction
# =============================================================================

def auction_pass_available(engine: Engine, player: Player) -> bool:
    if engine.auction is None:
        if engine.round == 1 and not player.acquired_plant:
            # Everyone buys a plant in the first round, unless none is affordable
            # and the game lets starved players pass
            return engine.options.starved_auction == "pass" and not _affordable_plants(engine, player)
        return True

    # Whoever opened the auction has to bid first
    return engine.auction.bid is not None


def auction_pass_exec(engine: Engine, player: Player, data: Any) -> None:
    if engine.auction is None:
        engine.switch_to_next_player()
        return

    engine.add_log(LogItem.of_event(GameEventName.AUCTION_PASS, player=player.color))
    resolve_auction(engine)


def auction_available(engine: Engine, player: Player) -> Any:
    if player.acquired_plant or engine.auction is not None:
        return False

    plants = _affordable_plants(engine, player)
    if not plants:
        return False
    return {"plants": plants}


def auction_valid(move: Any, available: dict[str, list[int]]) -> bool:
    plant = move.get("plant") if isinstance(move, dict) else None
    return _is_int(plant) and plant in available["plants"]


def auction_exec(engine: Engine, player: Player, data: dict[str, Any]) -> None:
    engine.add_log(LogItem.of_event(
        GameEventName.AUCTION_START,
        player=player.color,
        plant=int(data["plant"]),
    ))
    resolve_auction(engine)


def bid_available(engine: Engine, player: Player) -> Any:
    auction = engine.auction
    if player.acquired_plant or auction is None:
        return False

    if (auction.bid or 0) >= player.money or auction.plant.price > player.money:
        return False

    return {"range": [auction.minimum_bid(), player.money]}


def bid_valid(move: Any, available: dict[str, list[int]]) -> bool:
    bid = move.get("bid") if isinstance(move, dict) else None
    low, high = available["range"]
    return _is_int(bid) and low <= bid <= high


def bid_exec(engine: Engine, player: Player, data: dict[str, Any]) -> None:
    engine.add_log(LogItem.of_event(GameEventName.AUCTION_BID, player=player.color, bid=int(data["bid"])))
    resolve_auction(engine)


def resolve_auction(engine: Engine) -> None:
    """
    Close the auction once a single bidder is left.

    The winner pays the last bid, a replacement plant is drawn, and the
    turn passes on only if the winner opened the auction.
    """
    auction = engine.auction
    if auction is None or not auction.resolved:
        return

    winner, nominator = auction.winner, auction.nominator
    engine.add_log(LogItem.of_event(
        GameEventName.ACQUIRE_PLANT,
        player=winner,
        plant=auction.plant.to_json(),
        cost=auction.bid,
    ))

    replacement = engine.board.peek_plant()
    if replacement is not None:
        engine.add_log(LogItem.of_event(GameEventName.DRAW_PLANT, plant=replacement.to_json()))

    if engine.board.peek_plant() is None and engine.major_phase != MajorPhase.STEP3:
        engine.add_log(LogItem.of_event(GameEventName.MAJOR_PHASE_CHANGE, phase=MajorPhase.STEP3.value))

    if winner == nominator:
        engine.switch_to_next_player()


# =============================================================================
# Commodities trading
# =============================================================================

def buy_resource_available(engine: Engine, player: Player) -> Any:
    entries = []
    for resource in Resource:
        limit = min(
            player.available_space(resource),
            engine.board.affordable_units(resource, player.money),
        )
        if limit > 0:
            entries.append({"resource": resource.value, "max": limit})
    return entries or False


def buy_resource_valid(move: Any, available: dict[str, Any]) -> bool:
    if not isinstance(move, dict):
        return False
    count = move.get("count")
    return move.get("resource") == available["resource"] and _is_int(count) and 1 <= count <= available["max"]


def buy_resource_exec(engine: Engine, player: Player, data: dict[str, Any]) -> None:
    resource = Resource(data["resource"])
    count = int(data["count"])
    cost = engine.board.resource_cost(resource, count)
    engine.add_log(LogItem.of_event(
        GameEventName.ACQUIRE_RESOURCES,
        player=player.color,
        resource=resource.value,
        count=count,
        cost=cost,
    ))


def end_turn(engine: Engine, player: Player, data: Any) -> None:
    engine.switch_to_next_player()


COMMANDS = build_registry({
    RoundPhase.PLANT_AUCTION: {
        MoveName.PASS: CommandSpec(exec=auction_pass_exec, available=auction_pass_available),
        MoveName.AUCTION: CommandSpec(exec=auction_exec, available=auction_available, valid=auction_valid),
        MoveName.BID: CommandSpec(exec=bid_exec, available=bid_available, valid=bid_valid),
    },
    RoundPhase.COMMODITIES_TRADING: {
        MoveName.BUY_RESOURCE: CommandSpec(
            exec=buy_resource_exec,
            available=buy_resource_available,
            valid=buy_resource_valid,
        ),
        MoveName.PASS: CommandSpec(exec=end_turn),
    },
    RoundPhase.CONSTRUCTION: {
        MoveName.PASS: CommandSpec(exec=end_turn),
    },
    RoundPhase.BUREAUCRACY: {
        MoveName.PASS: CommandSpec(exec=end_turn),
    },
})
