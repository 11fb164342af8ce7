"""
Maps - Static city graph tables.

Each map has zones (groups of cities) and weighted links between cities.
Tables are read-only inputs to Board initialization.
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Link:
    nodes: tuple[str, str]
    cost: int


@dataclass(frozen=True)
class MapData:
    name: str
    zones: dict[str, list[str]]
    links: list[Link]

    @property
    def cities(self) -> list[str]:
        return [city for zone in self.zones.values() for city in zone]


@dataclass
class GameMap:
    """Runtime map: which players occupy each city."""
    model: str
    cities: dict[str, list[str]] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)

    @classmethod
    def create(cls, data: MapData) -> GameMap:
        return cls(
            model=data.name,
            cities={city: [] for city in data.cities},
            links=list(data.links),
        )

    def neighbors(self, city: str) -> dict[str, int]:
        """Adjacent cities and the cost of the link to each."""
        result = {}
        for link in self.links:
            if city in link.nodes:
                other = link.nodes[1] if link.nodes[0] == city else link.nodes[0]
                result[other] = link.cost
        return result

    def to_json(self) -> dict:
        return {
            "model": self.model,
            "cities": {city: list(occupants) for city, occupants in self.cities.items()},
            "links": [{"nodes": list(link.nodes), "cost": link.cost} for link in self.links],
        }


def _links(*entries: tuple[str, str, int]) -> list[Link]:
    return [Link(nodes=(a, b), cost=cost) for a, b, cost in entries]


US = MapData(
    name="us",
    zones={
        "northwest": ["Seattle", "Portland", "Boise", "Billings", "Cheyenne", "Denver", "Omaha"],
        "southwest": ["San Francisco", "Los Angeles", "San Diego", "Las Vegas", "Phoenix", "Salt Lake City", "Santa Fe"],
        "midwest": ["Kansas City", "Oklahoma City", "Dallas", "Houston", "Memphis", "St. Louis", "New Orleans"],
    },
    links=_links(
        ("Seattle", "Portland", 3),
        ("Seattle", "Boise", 12),
        ("Seattle", "Billings", 9),
        ("Portland", "Boise", 13),
        ("Portland", "San Francisco", 24),
        ("Boise", "Billings", 12),
        ("Boise", "Cheyenne", 24),
        ("Boise", "Salt Lake City", 8),
        ("Boise", "San Francisco", 23),
        ("Billings", "Cheyenne", 9),
        ("Cheyenne", "Denver", 0),
        ("Cheyenne", "Omaha", 14),
        ("Denver", "Kansas City", 16),
        ("Denver", "Salt Lake City", 21),
        ("Denver", "Santa Fe", 13),
        ("Omaha", "Kansas City", 5),
        ("San Francisco", "Los Angeles", 9),
        ("San Francisco", "Las Vegas", 14),
        ("San Francisco", "Salt Lake City", 27),
        ("Los Angeles", "San Diego", 3),
        ("Los Angeles", "Las Vegas", 9),
        ("San Diego", "Las Vegas", 9),
        ("San Diego", "Phoenix", 14),
        ("Las Vegas", "Salt Lake City", 18),
        ("Las Vegas", "Phoenix", 15),
        ("Las Vegas", "Santa Fe", 27),
        ("Phoenix", "Santa Fe", 18),
        ("Santa Fe", "Kansas City", 16),
        ("Santa Fe", "Oklahoma City", 15),
        ("Santa Fe", "Dallas", 16),
        ("Santa Fe", "Houston", 21),
        ("Kansas City", "Oklahoma City", 8),
        ("Kansas City", "St. Louis", 6),
        ("Kansas City", "Memphis", 12),
        ("Oklahoma City", "Dallas", 3),
        ("Oklahoma City", "Memphis", 14),
        ("Dallas", "Houston", 5),
        ("Dallas", "Memphis", 12),
        ("Dallas", "New Orleans", 12),
        ("Houston", "New Orleans", 8),
        ("Memphis", "St. Louis", 7),
        ("Memphis", "New Orleans", 7),
    ),
)

MAPS: dict[str, MapData] = {"us": US}
