"""Per-game options, recorded in the GameStart event."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from ... import config

STARVED_POLICIES = ("pass", "skip")


@dataclass(frozen=True)
class GameOptions:
    starting_money: int = 50
    round_limit: int = 0  # 0 = no limit
    starved_auction: str = "pass"

    def __post_init__(self):
        if self.starved_auction not in STARVED_POLICIES:
            raise ValueError(
                f"starved_auction must be one of {STARVED_POLICIES}, got {self.starved_auction!r}"
            )
        if self.starting_money < 0:
            raise ValueError("starting_money must not be negative")
        if self.round_limit < 0:
            raise ValueError("round_limit must not be negative")

    @classmethod
    def from_env(cls) -> GameOptions:
        return cls(
            starting_money=config.STARTING_MONEY,
            round_limit=config.ROUND_LIMIT,
            starved_auction=config.STARVED_AUCTION_POLICY,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "startingMoney": self.starting_money,
            "roundLimit": self.round_limit,
            "starvedAuction": self.starved_auction,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> GameOptions:
        data = data or {}
        defaults = cls()
        return cls(
            starting_money=data.get("startingMoney", defaults.starting_money),
            round_limit=data.get("roundLimit", defaults.round_limit),
            starved_auction=data.get("starvedAuction", defaults.starved_auction),
        )
