"""
Player - Per-player mutable state.

Money, stored resources, owned plants and cities, plus the per-round
`acquired_plant` flag. Storage capacity is derived from owned plants.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .enums import Resource
from .plants import Plant


def _empty_resources() -> dict[Resource, int]:
    return {resource: 0 for resource in Resource}


@dataclass
class Player:
    color: str
    money: int = 50
    resources: dict[Resource, int] = field(default_factory=_empty_resources)
    plants: list[Plant] = field(default_factory=list)
    cities: list[str] = field(default_factory=list)
    acquired_plant: bool = False  # reset every round

    @property
    def id(self) -> str:
        return self.color

    def begin_round(self) -> None:
        self.acquired_plant = False

    def plant(self, price: int) -> Plant | None:
        for plant in self.plants:
            if plant.price == price:
                return plant
        return None

    def highest_plant(self) -> int:
        return max((plant.price for plant in self.plants), default=0)

    def plants_for_resource(self, resource: Resource) -> list[Plant]:
        return [plant for plant in self.plants if plant.burns(resource)]

    def total_space(self, resource: Resource) -> int:
        """Twice the intake of every plant able to burn the resource."""
        return 2 * sum(plant.intake for plant in self.plants_for_resource(resource))

    def _private_space(self, resource: Resource) -> int:
        return 2 * sum(
            plant.intake for plant in self.plants_for_resource(resource) if not plant.is_hybrid
        )

    def available_space(self, resource: Resource) -> int:
        """
        Units of a resource the player can still store.

        Hybrid plants offer one shared store for two resources. Each resource
        first fills its own private store; whatever spills over from either
        resource eats into the shared one. Assumes a resource shares storage
        with at most one other resource.
        """
        private = self._private_space(resource)
        free = max(0, private - self.resources[resource])

        hybrids = [plant for plant in self.plants_for_resource(resource) if plant.is_hybrid]
        if not hybrids:
            return free

        shared = 2 * sum(plant.intake for plant in hybrids)
        partner = next(r for r in hybrids[0].energy if r != resource)

        overflow = max(0, self.resources[resource] - private)
        partner_overflow = max(0, self.resources[partner] - self._private_space(partner))

        return free + max(0, shared - overflow - partner_overflow)

    def gain_plant(self, plant: Plant, cost: int) -> None:
        self.money -= cost
        self.plants.append(plant)
        self.acquired_plant = True

    def to_json(self) -> dict[str, Any]:
        return {
            "color": self.color,
            "money": self.money,
            "resources": {r.value: n for r, n in self.resources.items()},
            "plants": [plant.to_json() for plant in self.plants],
            "cities": list(self.cities),
            "acquiredPlant": self.acquired_plant,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Player:
        resources = _empty_resources()
        resources.update({Resource(r): n for r, n in data.get("resources", {}).items()})
        return cls(
            color=data["color"],
            money=data["money"],
            resources=resources,
            plants=[Plant.from_json(plant) for plant in data.get("plants", [])],
            cities=list(data.get("cities", [])),
            acquired_plant=data.get("acquiredPlant", False),
        )
