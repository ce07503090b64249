"""
Injectable sources of uniform random indices.

Question picking goes through one of these so sessions can be replayed:
SeededRandomSource for reproducible runs, ScriptedRandomSource for tests
that need an exact draw order.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional, Protocol


class RandomSource(Protocol):
    """Anything that returns a uniform index in [0, n)."""

    def randrange(self, n: int) -> int:
        ...


class SeededRandomSource:
    """Uniform indices from random.Random; unseeded means OS entropy."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def randrange(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Cannot pick from an empty range (n={n})")
        return self._rng.randrange(n)


class ScriptedRandomSource:
    """
    Replays a fixed sequence of indices.

    Usage:
        source = ScriptedRandomSource([0, 2, 1])
        source.randrange(3)  # 0
    """

    def __init__(self, indices: Iterable[int]):
        self._indices = list(indices)
        self._position = 0

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._indices)

    def randrange(self, n: int) -> int:
        if self.exhausted:
            raise IndexError("Scripted random source has no indices left")
        index = self._indices[self._position]
        if not 0 <= index < n:
            raise ValueError(f"Scripted index {index} out of range for n={n}")
        self._position += 1
        return index
