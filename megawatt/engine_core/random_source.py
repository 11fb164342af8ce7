"""
Random Source - Seeded deterministic randomness.

All randomness in a game flows through one RandomSource owned by the engine.
The same seed and the same sequence of calls always produce the same draws,
and the internal state can be exported to JSON and restored later.
"""

from __future__ import annotations
import random
from typing import Any, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Deterministic pseudo-random generator seeded by an opaque string.

    Wraps random.Random, whose string seeding is stable across processes
    (it does not depend on PYTHONHASHSEED).
    """

    def __init__(self, seed: str = ""):
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        """Next float in [0, 1)."""
        return self._rng.random()

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy of items; the input is left untouched."""
        result = list(items)
        self._rng.shuffle(result)
        return result

    def state(self) -> list[Any]:
        """Export internal state as JSON-compatible data."""
        version, internal, gauss_next = self._rng.getstate()
        return [version, list(internal), gauss_next]

    def set_state(self, state: Sequence[Any]) -> None:
        """Restore a state previously produced by state()."""
        version, internal, gauss_next = state
        self._rng.setstate((version, tuple(internal), gauss_next))

    @classmethod
    def from_state(cls, state: Sequence[Any], seed: str = "") -> RandomSource:
        source = cls(seed)
        source.set_state(state)
        return source


def shuffle(items: Sequence[T], rng: RandomSource) -> list[T]:
    """Convenience function: shuffle items with the given source."""
    return rng.shuffle(items)
