"""
Power Plants - Static plant deck.

Plant structure:
- Price (unique, doubles as the plant id)
- Energy: resources the plant can burn (empty for ecological plants,
  two entries for hybrid plants that share one intake between them)
- Intake: resources burned per use
- Output: cities powered per use
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .enums import Resource

COAL = Resource.COAL
OIL = Resource.OIL
GARBAGE = Resource.GARBAGE
URANIUM = Resource.URANIUM


@dataclass(frozen=True)
class Plant:
    """A purchasable power plant."""
    price: int
    energy: tuple[Resource, ...]
    intake: int
    output: int

    @property
    def is_hybrid(self) -> bool:
        return len(self.energy) == 2

    def burns(self, resource: Resource) -> bool:
        return resource in self.energy

    def to_json(self) -> dict[str, Any]:
        return {
            "price": self.price,
            "energy": [resource.value for resource in self.energy],
            "intake": self.intake,
            "output": self.output,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Plant:
        return cls(
            price=data["price"],
            energy=tuple(Resource(resource) for resource in data["energy"]),
            intake=data["intake"],
            output=data["output"],
        )


def _plant(price: int, energy: tuple[Resource, ...], intake: int, output: int) -> Plant:
    return Plant(price=price, energy=energy, intake=intake, output=output)


# ============================================================================
# Plant Deck (sorted by price)
# ============================================================================

PLANTS: list[Plant] = [
    _plant(3, (OIL,), 2, 1),
    _plant(4, (COAL,), 2, 1),
    _plant(5, (COAL, OIL), 2, 1),
    _plant(6, (GARBAGE,), 1, 1),
    _plant(7, (OIL,), 3, 2),
    _plant(8, (COAL,), 3, 2),
    _plant(9, (OIL,), 1, 1),
    _plant(10, (COAL,), 2, 2),
    _plant(11, (URANIUM,), 1, 2),
    _plant(12, (COAL, OIL), 2, 2),
    _plant(13, (), 0, 1),
    _plant(14, (GARBAGE,), 2, 2),
    _plant(15, (COAL,), 2, 3),
    _plant(16, (OIL,), 2, 3),
    _plant(17, (URANIUM,), 1, 2),
    _plant(18, (), 0, 2),
    _plant(19, (GARBAGE,), 2, 3),
    _plant(20, (COAL,), 3, 5),
    _plant(21, (COAL, OIL), 2, 4),
    _plant(22, (), 0, 2),
    _plant(23, (URANIUM,), 1, 3),
    _plant(24, (GARBAGE,), 2, 4),
    _plant(25, (COAL,), 2, 5),
    _plant(26, (OIL,), 2, 5),
    _plant(27, (), 0, 3),
    _plant(28, (URANIUM,), 1, 4),
    _plant(29, (COAL, OIL), 1, 4),
    _plant(30, (GARBAGE,), 3, 6),
    _plant(31, (COAL,), 3, 6),
    _plant(32, (OIL,), 3, 6),
    _plant(33, (), 0, 4),
    _plant(34, (URANIUM,), 1, 5),
    _plant(35, (OIL,), 1, 5),
    _plant(36, (COAL,), 3, 7),
    _plant(37, (), 0, 4),
    _plant(38, (GARBAGE,), 3, 7),
    _plant(39, (URANIUM,), 1, 6),
    _plant(40, (OIL,), 2, 6),
    _plant(42, (COAL,), 2, 6),
    _plant(44, (), 0, 5),
    _plant(46, (COAL, OIL), 3, 7),
    _plant(50, (), 0, 6),
]

# Plants face up in the markets at game start: four current, four future
INITIAL_MARKET_SIZE = 8

# Plant placed on top of the draw pile after shuffling
TOP_PLANT = 13


def get_plant(price: int) -> Plant | None:
    """Look up a plant by price."""
    for plant in PLANTS:
        if plant.price == price:
            return plant
    return None
