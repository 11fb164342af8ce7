"""
Reducer - Applies game events to engine state.

Every state change of a game goes through one of these handlers. They
run identically live and during replay, so they never log further items
and never consult anything but the engine and the event payload.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ...engine_core import GameEvent, ReplayDivergence
from .auction import AuctionState
from .board import Board, plan_from_json
from .enums import PLAYER_COLORS, GameEventName, MajorPhase, Resource, RoundPhase
from .options import GameOptions
from .player import Player
from .plants import Plant

if TYPE_CHECKING:
    from .engine import Engine

logger = logging.getLogger(__name__)


def game_start(engine: Engine, event: GameEvent) -> None:
    """
    Build the board and seat the players.

    The random source is consumed here, draw pile first, then colors.
    """
    engine.options = GameOptions.from_json(event.get("options"))
    engine.board = Board.create(engine.rng)

    count = event["players"]
    colors = engine.rng.shuffle(PLAYER_COLORS)[:count]
    engine.players = {
        color: Player(color=color, money=engine.options.starting_money) for color in colors
    }
    engine.turnorder = list(colors)
    engine.major_phase = MajorPhase.STEP1
    logger.info("Game started with %d players", count)


def round_start(engine: Engine, event: GameEvent) -> None:
    engine.round = event["round"]
    for player in engine.players.values():
        player.begin_round()
    logger.info("Round %d", engine.round)


def turn_order(engine: Engine, event: GameEvent) -> None:
    order = list(event["turnorder"])
    for player_id in order:
        engine.player(player_id)
    if sorted(order) != sorted(engine.players):
        raise ReplayDivergence(f"Turn order {order} does not seat every player", field="turnorder")
    engine.turnorder = order


def phase_change(engine: Engine, event: GameEvent) -> None:
    engine.phase = RoundPhase(event["phase"])
    engine.auction = None
    logger.info("Round %d enters %s", engine.round, engine.phase.value)


def major_phase_change(engine: Engine, event: GameEvent) -> None:
    engine.major_phase = MajorPhase(event["phase"])
    if engine.major_phase == MajorPhase.STEP3:
        engine.board.enter_step3()
    logger.info("Game enters %s", engine.major_phase.value)


def current_player(engine: Engine, event: GameEvent) -> None:
    engine.player(event["player"])
    engine.set_turn(event["player"])


def auction_start(engine: Engine, event: GameEvent) -> None:
    nominator = event["player"]
    plant = engine.board.market_plant(event["plant"])
    if plant is None:
        raise ReplayDivergence(f"Plant {event['plant']} is not in the current market", field="plant")

    start = engine.turnorder.index(nominator)
    participants = [
        player_id for player_id in engine.turnorder[start:]
        if not engine.player(player_id).acquired_plant
    ]
    engine.auction = AuctionState(participants=participants, current=nominator, plant=plant)


def auction_bid(engine: Engine, event: GameEvent) -> None:
    engine.auction.bid = event["bid"]
    engine.auction.rotate()


def auction_pass(engine: Engine, event: GameEvent) -> None:
    engine.auction.drop(event["player"])


def acquire_plant(engine: Engine, event: GameEvent) -> None:
    player = engine.player(event["player"])
    plant = Plant.from_json(event["plant"])
    engine.board.remove_market_plant(plant.price)
    player.gain_plant(plant, event["cost"])
    engine.auction = None
    logger.info("%s acquires plant %d for %d", player.color, plant.price, event["cost"])


def draw_plant(engine: Engine, event: GameEvent) -> None:
    expected = Plant.from_json(event["plant"])
    drawn = engine.board.draw_plant()
    if drawn != expected:
        raise ReplayDivergence(
            f"Drew plant {drawn.price if drawn else None}, log says {expected.price}",
            field="draw",
        )
    engine.board.market.future.plants.append(drawn)
    engine.board.reorder_markets()


def acquire_resources(engine: Engine, event: GameEvent) -> None:
    player = engine.player(event["player"])
    resource = Resource(event["resource"])
    count = event["count"]

    cost = engine.board.take_resources(resource, count)
    if cost != event["cost"]:
        raise ReplayDivergence(
            f"{count} {resource.value} cost {cost}, log says {event['cost']}",
            field="commodities",
        )
    player.money -= cost
    player.resources[resource] += count


def fill_resources(engine: Engine, event: GameEvent) -> None:
    engine.board.apply_fill(plan_from_json(event["resources"]))


def game_end(engine: Engine, event: GameEvent) -> None:
    engine.ended = True
    engine.available_commands = []
    logger.info("Game over after round %d", engine.round)


_HANDLERS = {
    GameEventName.GAME_START: game_start,
    GameEventName.ROUND_START: round_start,
    GameEventName.TURN_ORDER: turn_order,
    GameEventName.PHASE_CHANGE: phase_change,
    GameEventName.MAJOR_PHASE_CHANGE: major_phase_change,
    GameEventName.CURRENT_PLAYER: current_player,
    GameEventName.AUCTION_START: auction_start,
    GameEventName.AUCTION_BID: auction_bid,
    GameEventName.AUCTION_PASS: auction_pass,
    GameEventName.ACQUIRE_PLANT: acquire_plant,
    GameEventName.DRAW_PLANT: draw_plant,
    GameEventName.ACQUIRE_RESOURCES: acquire_resources,
    GameEventName.FILL_RESOURCES: fill_resources,
    GameEventName.GAME_END: game_end,
}

EVENT_HANDLERS = {name.value: handler for name, handler in _HANDLERS.items()}
