"""
Board - Plant market, commodity ladder and resource reserve.

The board owns:
- market.current / market.future: the plant offer, always ordered by price
- draw: the remaining plant pile
- commodities: the price ladder, ordered by ascending price
- pool: resources outside the ladder, used to refill it

Allocation and mutation are kept apart: refill_resources() only computes a
fill plan, the event layer logs it and apply_fill() applies it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any

from ...engine_core import RandomSource
from .enums import MajorPhase, Resource
from .maps import MAPS, GameMap
from .plants import PLANTS, TOP_PLANT, Plant, get_plant

logger = logging.getLogger(__name__)

RESOURCES = list(Resource)

# Units of each resource in the game box
RESOURCE_TOTALS = {
    Resource.COAL: 24,
    Resource.OIL: 24,
    Resource.GARBAGE: 24,
    Resource.URANIUM: 12,
}


def _amounts(coal: int, oil: int, garbage: int, uranium: int) -> dict[Resource, int]:
    return {
        Resource.COAL: coal,
        Resource.OIL: oil,
        Resource.GARBAGE: garbage,
        Resource.URANIUM: uranium,
    }


# Units moved from the pool to the ladder at the end of a round,
# indexed by player count, then by step
REFILL: dict[int, dict[MajorPhase, dict[Resource, int]]] = {
    2: {
        MajorPhase.STEP1: _amounts(coal=3, oil=2, garbage=1, uranium=1),
        MajorPhase.STEP2: _amounts(coal=4, oil=2, garbage=2, uranium=1),
        MajorPhase.STEP3: _amounts(coal=3, oil=4, garbage=3, uranium=1),
    },
    3: {
        MajorPhase.STEP1: _amounts(coal=4, oil=2, garbage=1, uranium=1),
        MajorPhase.STEP2: _amounts(coal=5, oil=3, garbage=2, uranium=1),
        MajorPhase.STEP3: _amounts(coal=3, oil=4, garbage=3, uranium=1),
    },
    4: {
        MajorPhase.STEP1: _amounts(coal=5, oil=3, garbage=2, uranium=1),
        MajorPhase.STEP2: _amounts(coal=6, oil=4, garbage=3, uranium=2),
        MajorPhase.STEP3: _amounts(coal=4, oil=5, garbage=4, uranium=2),
    },
    5: {
        MajorPhase.STEP1: _amounts(coal=5, oil=4, garbage=3, uranium=2),
        MajorPhase.STEP2: _amounts(coal=7, oil=5, garbage=3, uranium=3),
        MajorPhase.STEP3: _amounts(coal=5, oil=6, garbage=5, uranium=2),
    },
    6: {
        MajorPhase.STEP1: _amounts(coal=7, oil=5, garbage=3, uranium=2),
        MajorPhase.STEP2: _amounts(coal=9, oil=6, garbage=5, uranium=3),
        MajorPhase.STEP3: _amounts(coal=6, oil=7, garbage=6, uranium=3),
    },
}

# City counts that trigger Step 2 and the end of the game
STEP2_CITIES = {2: 10, 3: 7, 4: 7, 5: 7, 6: 7}
END_CITIES = {2: 21, 3: 17, 4: 17, 5: 15, 6: 14}

# Market slots once Step 3 begins
STEP3_CURRENT_MAX = 6
STEP3_FUTURE_MAX = 0

FillPlan = dict[int, dict[Resource, int]]


@dataclass
class PlantRow:
    """One row of the plant market."""
    plants: list[Plant]
    max: int

    def to_json(self) -> dict[str, Any]:
        return {"plants": [plant.to_json() for plant in self.plants], "max": self.max}


@dataclass
class Market:
    current: PlantRow
    future: PlantRow

    def to_json(self) -> dict[str, Any]:
        return {"current": self.current.to_json(), "future": self.future.to_json()}


@dataclass
class CommodityTier:
    """
    One price slot on the commodity ladder.

    Only resources with an entry in `max` can be stocked here.
    """
    price: int
    current: dict[Resource, int]
    max: dict[Resource, int]

    def room(self, resource: Resource) -> int:
        return self.max.get(resource, 0) - self.current.get(resource, 0)

    def to_json(self) -> dict[str, Any]:
        return {
            "price": self.price,
            "resources": {
                "current": {r.value: n for r, n in self.current.items()},
                "max": {r.value: n for r, n in self.max.items()},
            },
        }


def _tier(price: int, coal: int = 0, oil: int = 0, garbage: int = 0, uranium: int = 0) -> CommodityTier:
    """Tiers priced 1 to 8 hold every resource; pricier tiers only uranium."""
    if price <= 8:
        maximum = _amounts(coal=3, oil=3, garbage=3, uranium=1)
        current = _amounts(coal=coal, oil=oil, garbage=garbage, uranium=uranium)
    else:
        maximum = {Resource.URANIUM: 1}
        current = {Resource.URANIUM: uranium}
    return CommodityTier(price=price, current=current, max=maximum)


def initial_commodities() -> list[CommodityTier]:
    return [
        _tier(1, coal=3),
        _tier(2, coal=3),
        _tier(3, coal=3, oil=3),
        _tier(4, coal=3, oil=3),
        _tier(5, coal=3, oil=3),
        _tier(6, coal=3, oil=3),
        _tier(7, coal=3, oil=3, garbage=3),
        _tier(8, coal=3, oil=3, garbage=3),
        _tier(10),
        _tier(12),
        _tier(14, uranium=1),
        _tier(16, uranium=1),
    ]


@dataclass
class DrawPile:
    """
    Remaining plants, top first.

    `future` mirrors the market split and stays empty in the base game.
    """
    current: list[Plant]
    future: list[Plant] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "current": [plant.to_json() for plant in self.current],
            "future": [plant.to_json() for plant in self.future],
        }


@dataclass
class Board:
    map: GameMap
    pool: dict[Resource, int]
    market: Market
    commodities: list[CommodityTier]
    draw: DrawPile

    @classmethod
    def create(cls, rng: RandomSource, map_name: str = "us") -> Board:
        """
        Set up a fresh board.

        Consumes the random source once, to shuffle the draw pile. The plant
        priced 13 goes on top of the shuffled pile.
        """
        top = get_plant(TOP_PLANT)
        rest = [plant for plant in PLANTS if plant.price > 10 and plant.price != TOP_PLANT]
        draw = DrawPile(current=[top, *rng.shuffle(rest)])

        market = Market(
            current=PlantRow(plants=PLANTS[0:4], max=4),
            future=PlantRow(plants=PLANTS[4:8], max=4),
        )

        commodities = initial_commodities()
        pool = {
            resource: total - sum(tier.current.get(resource, 0) for tier in commodities)
            for resource, total in RESOURCE_TOTALS.items()
        }

        return cls(
            map=GameMap.create(MAPS[map_name]),
            pool=pool,
            market=market,
            commodities=commodities,
            draw=draw,
        )

    # =========================================================================
    # Plants
    # =========================================================================

    def reorder_markets(self) -> None:
        """Re-slice both market rows so current holds the cheapest plants."""
        plants = sorted(
            self.market.current.plants + self.market.future.plants,
            key=lambda plant: plant.price,
        )
        current_max = self.market.current.max
        self.market.current.plants = plants[:current_max]
        self.market.future.plants = plants[current_max:current_max + self.market.future.max]

    def draw_plant(self) -> Plant | None:
        """Take the top plant of the pile; None once the pile is exhausted."""
        if not self.draw.current:
            return None
        return self.draw.current.pop(0)

    def peek_plant(self) -> Plant | None:
        return self.draw.current[0] if self.draw.current else None

    def market_plant(self, price: int) -> Plant | None:
        """Find a plant in the current market row."""
        for plant in self.market.current.plants:
            if plant.price == price:
                return plant
        return None

    def remove_market_plant(self, price: int) -> Plant | None:
        for row in (self.market.current, self.market.future):
            for index, plant in enumerate(row.plants):
                if plant.price == price:
                    return row.plants.pop(index)
        return None

    def enter_step3(self) -> None:
        self.market.current.max = STEP3_CURRENT_MAX
        self.market.future.max = STEP3_FUTURE_MAX
        self.reorder_markets()

    # =========================================================================
    # Resources
    # =========================================================================

    def stock(self, resource: Resource) -> int:
        """Units of a resource currently on the ladder."""
        return sum(tier.current.get(resource, 0) for tier in self.commodities)

    def resource_cost(self, resource: Resource, count: int) -> int | None:
        """Price of the `count` cheapest units on the ladder, None if short."""
        cost = 0
        remaining = count
        for tier in self.commodities:
            if remaining <= 0:
                break
            take = min(remaining, tier.current.get(resource, 0))
            cost += take * tier.price
            remaining -= take
        if remaining > 0:
            return None
        return cost

    def affordable_units(self, resource: Resource, money: int) -> int:
        """How many units of a resource `money` buys, cheapest first."""
        units = 0
        for tier in self.commodities:
            for _ in range(tier.current.get(resource, 0)):
                if tier.price > money:
                    return units
                money -= tier.price
                units += 1
        return units

    def take_resources(self, resource: Resource, count: int) -> int:
        """Remove the `count` cheapest units from the ladder and return their cost."""
        cost = 0
        remaining = count
        for tier in self.commodities:
            if remaining <= 0:
                break
            take = min(remaining, tier.current.get(resource, 0))
            if take:
                tier.current[resource] -= take
                cost += take * tier.price
                remaining -= take
        return cost

    def refill_resources(self, player_count: int, step: MajorPhase | str) -> FillPlan:
        """
        Compute how the pool refills the ladder.

        For each resource, the refill amount is capped by the pool. Tiers are
        filled from the most expensive down, each up to its own max.
        """
        rates = REFILL[player_count][MajorPhase(step)]
        plan: FillPlan = {}

        for resource in RESOURCES:
            avail = min(self.pool[resource], rates[resource])
            if avail <= 0:
                continue
            for tier in reversed(self.commodities):
                if resource not in tier.max or tier.room(resource) <= 0:
                    continue
                x = min(avail, tier.room(resource))
                plan.setdefault(tier.price, {})[resource] = x
                avail -= x
                if avail <= 0:
                    break

        return plan

    def apply_fill(self, plan: FillPlan) -> None:
        """Move the planned units from the pool onto the ladder."""
        tiers = {tier.price: tier for tier in self.commodities}
        for price, amounts in plan.items():
            tier = tiers[int(price)]
            for resource, count in amounts.items():
                resource = Resource(resource)
                tier.current[resource] = tier.current.get(resource, 0) + count
                self.pool[resource] -= count
        logger.debug("Refilled commodities: %s", plan)

    def to_json(self) -> dict[str, Any]:
        return {
            "map": self.map.to_json(),
            "pool": {"resources": {r.value: n for r, n in self.pool.items()}},
            "market": self.market.to_json(),
            "commodities": [tier.to_json() for tier in self.commodities],
            "draw": self.draw.to_json(),
        }


def plan_to_json(plan: FillPlan) -> dict[str, dict[str, int]]:
    """Fill plan with string keys, as carried in a FillResources event."""
    return {
        str(price): {Resource(r).value: n for r, n in amounts.items()}
        for price, amounts in plan.items()
    }


def plan_from_json(data: dict[str, dict[str, int]]) -> FillPlan:
    return {
        int(price): {Resource(r): n for r, n in amounts.items()}
        for price, amounts in data.items()
    }
