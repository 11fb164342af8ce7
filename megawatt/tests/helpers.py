"""
Shared moves for driving a game through whole phases in tests.
"""

from ..engine_core import AvailableCommand, Command
from ..games.powerplant import Engine, RoundPhase


def concrete(command: AvailableCommand) -> Command:
    """Pick one submittable command out of an advertised entry."""
    if command.move == "auction":
        return Command.auction(command.data["plants"][0])
    if command.move == "bid":
        return Command.bid(command.data["range"][0])
    if command.move == "buyresource":
        return Command.buy_resource(command.data["resource"], 1)
    return Command(move=command.move)


def available_moves(engine: Engine) -> dict[str, AvailableCommand]:
    return {command.move: command for command in engine.available_commands}


def play_plant_auction(engine: Engine) -> None:
    """
    Finish the plant auction: each player nominates the cheapest plant they
    can afford and wins it with the minimum bid, everyone else passes.
    """
    round_ = engine.round
    while engine.phase == RoundPhase.PLANT_AUCTION and engine.round == round_ and not engine.ended:
        player = engine.current_player
        moves = available_moves(engine)
        if engine.auction is None and "auction" in moves:
            engine.move(player, concrete(moves["auction"]))
        elif engine.auction is not None and engine.auction.bid is None:
            engine.move(player, concrete(moves["bid"]))
        else:
            engine.move(player, Command.pass_())


def pass_phase(engine: Engine) -> None:
    """Every player passes until the phase changes."""
    phase, round_ = engine.phase, engine.round
    while engine.phase == phase and engine.round == round_ and not engine.ended:
        engine.move(engine.current_player, Command.pass_())


def play_round(engine: Engine) -> None:
    play_plant_auction(engine)
    pass_phase(engine)  # commodities trading
    pass_phase(engine)  # construction
    pass_phase(engine)  # bureaucracy


def event_names(engine: Engine, start: int = 0) -> list[str]:
    return [item.event.name for item in engine.log[start:] if item.is_event]
