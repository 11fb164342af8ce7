"""
Auction - Bidding state for one nominated plant.

Present on the engine only while a nomination is open. Participants
rotate in turn order; a pass removes the passer for the rest of this
auction. The last remaining participant wins.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .plants import Plant


@dataclass
class AuctionState:
    participants: list[str]
    current: str
    plant: Plant
    bid: int | None = None
    nominator: str | None = None

    def __post_init__(self):
        if self.nominator is None:
            self.nominator = self.current

    @property
    def resolved(self) -> bool:
        return len(self.participants) <= 1 and self.bid is not None

    @property
    def winner(self) -> str | None:
        return self.participants[0] if self.resolved else None

    def minimum_bid(self) -> int:
        """The first bid may match the base price, later ones must raise."""
        if self.bid is None:
            return self.plant.price
        return max(self.plant.price, self.bid + 1)

    def rotate(self) -> None:
        """Hand the turn to the next participant after `current`."""
        index = self.participants.index(self.current)
        self.current = self.participants[(index + 1) % len(self.participants)]

    def drop(self, player: str) -> None:
        """Remove a participant; the turn moves to whoever followed them."""
        index = self.participants.index(player)
        self.participants.pop(index)
        if self.participants and self.current == player:
            self.current = self.participants[index % len(self.participants)]

    def to_json(self) -> dict[str, Any]:
        return {
            "participants": list(self.participants),
            "current": self.current,
            "plant": self.plant.to_json(),
            "bid": self.bid,
            "nominator": self.nominator,
        }
