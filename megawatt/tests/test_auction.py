"""
Tests for the plant auction protocol.

Tests:
- Participants and bidder rotation
- Strictly increasing bids
- Resolution: payment, plant transfer, replacement draw
- Who nominates next
"""

import pytest

from ..engine_core import Command, IllegalMove
from ..games.powerplant import AuctionState, get_plant
from .helpers import available_moves, event_names


def market_prices(engine):
    return sorted(p.price for p in engine.board.market.current.plants + engine.board.market.future.plants)


class TestAuctionState:
    """Rotation helpers on their own."""

    def test_rotate_wraps(self):
        auction = AuctionState(participants=["a", "b", "c"], current="c", plant=get_plant(3))
        auction.rotate()
        assert auction.current == "a"

    def test_drop_hands_turn_to_follower(self):
        auction = AuctionState(participants=["a", "b", "c"], current="c", plant=get_plant(3), bid=4)
        auction.drop("c")
        assert auction.participants == ["a", "b"]
        assert auction.current == "a"

    def test_resolved_needs_a_bid(self):
        auction = AuctionState(participants=["a"], current="a", plant=get_plant(3))
        assert not auction.resolved
        auction.bid = 3
        assert auction.resolved
        assert auction.winner == "a"

    def test_minimum_bid(self):
        auction = AuctionState(participants=["a", "b"], current="a", plant=get_plant(10))
        assert auction.minimum_bid() == 10
        auction.bid = 10
        assert auction.minimum_bid() == 11


class TestNomination:
    """Opening an auction."""

    def test_participants_from_nominator_on(self, three_player_game):
        engine = three_player_game
        p0, p1, p2 = engine.turnorder
        engine.move(p0, Command.auction(5))

        assert engine.auction.participants == [p0, p1, p2]
        assert engine.auction.current == p0
        assert engine.auction.bid is None
        assert engine.current_player == p0

    def test_nominator_must_bid_first(self, three_player_game):
        """Passing is not possible before the first bid."""
        engine = three_player_game
        p0 = engine.turnorder[0]
        engine.move(p0, Command.auction(5))

        assert list(available_moves(engine)) == ["bid"]
        assert available_moves(engine)["bid"].data == {"range": [5, 50]}
        with pytest.raises(IllegalMove):
            engine.move(p0, Command.pass_())

    def test_single_open_auction(self, three_player_game):
        engine = three_player_game
        p0 = engine.turnorder[0]
        engine.move(p0, Command.auction(5))
        with pytest.raises(IllegalMove):
            engine.move(p0, Command.auction(6))


class TestBidding:
    """Rotation and monotonic bids."""

    def test_bid_rotates_to_next(self, three_player_game):
        engine = three_player_game
        p0, p1, p2 = engine.turnorder
        engine.move(p0, Command.auction(3))
        engine.move(p0, Command.bid(3))
        assert engine.current_player == p1
        engine.move(p1, Command.bid(4))
        assert engine.current_player == p2

    def test_bids_strictly_increase(self, three_player_game):
        engine = three_player_game
        p0, p1, _ = engine.turnorder
        engine.move(p0, Command.auction(3))
        engine.move(p0, Command.bid(7))

        assert available_moves(engine)["bid"].data == {"range": [8, 50]}
        with pytest.raises(IllegalMove):
            engine.move(p1, Command.bid(7))
        with pytest.raises(IllegalMove):
            engine.move(p1, Command.bid(51))

    def test_cannot_outbid_without_money(self, three_player_game):
        """A player whose money does not exceed the bid can only pass."""
        engine = three_player_game
        p0, p1, _ = engine.turnorder
        engine.player(p1).money = 7
        engine.move(p0, Command.auction(3))
        engine.move(p0, Command.bid(7))
        assert list(available_moves(engine)) == ["pass"]


class TestResolution:
    """Closing an auction."""

    def test_other_player_wins(self, three_player_game):
        """The winner pays the last bid; the nominator nominates again."""
        engine = three_player_game
        p0, p1, p2 = engine.turnorder
        before = market_prices(engine)

        engine.move(p0, Command.auction(3))
        engine.move(p0, Command.bid(3))
        engine.move(p1, Command.bid(4))
        engine.move(p2, Command.pass_())
        assert engine.current_player == p0
        engine.move(p0, Command.pass_())

        assert engine.auction is None
        assert engine.player(p1).money == 46
        assert engine.player(p1).plant(3) is not None
        assert engine.player(p1).acquired_plant
        assert engine.player(p0).money == 50
        assert engine.current_player == p0

        after = market_prices(engine)
        assert 3 not in after
        assert len(after) == len(before)
        assert 13 in after

    def test_acquired_players_sit_out(self, three_player_game):
        """Players holding a plant this round neither bid nor nominate."""
        engine = three_player_game
        p0, p1, p2 = engine.turnorder
        engine.move(p0, Command.auction(3))
        engine.move(p0, Command.bid(3))
        engine.move(p1, Command.bid(4))
        engine.move(p2, Command.pass_())
        engine.move(p0, Command.pass_())

        engine.move(p0, Command.auction(4))
        assert engine.auction.participants == [p0, p2]
        engine.move(p0, Command.bid(4))
        engine.move(p2, Command.pass_())

        # p1 already owns a plant, so the turn skips to p2
        assert engine.current_player == p2
        assert engine.player(p0).money == 46

    def test_last_nomination_ends_phase(self, two_player_game):
        engine = two_player_game
        first, second = engine.turnorder
        engine.move(first, Command.auction(3))
        engine.move(first, Command.bid(3))
        engine.move(second, Command.pass_())

        start = len(engine.log)
        engine.move(second, Command.auction(4))
        engine.move(second, Command.bid(4))

        assert event_names(engine, start) == [
            "auctionstart",
            "auctionbid",
            "acquireplant",
            "drawplant",
            "phasechange",
            "currentplayer",
        ]
        assert engine.phase.value == "commoditiestrading"

    def test_acquire_event_payload(self, two_player_game):
        engine = two_player_game
        first, second = engine.turnorder
        engine.move(first, Command.auction(6))
        engine.move(first, Command.bid(6))
        engine.move(second, Command.bid(9))
        engine.move(first, Command.pass_())

        acquire = next(
            item.event for item in reversed(engine.log)
            if item.is_event and item.event.name == "acquireplant"
        )
        assert acquire.to_json() == {
            "name": "acquireplant",
            "player": second,
            "plant": get_plant(6).to_json(),
            "cost": 9,
        }
        # the nominator lost, so it is their turn to nominate again
        assert engine.current_player == first
