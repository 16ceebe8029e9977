"""Deterministic random source.

One instance is created per generation call from the resolved seed; nothing in
the engine touches the module-level ``random`` state, so concurrent calls and
unrelated code cannot perturb a level.
"""
from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    __slots__ = ("seed", "_rng")

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        """Return the next float in [0, 1)."""
        return self._rng.random()

    def randint_below(self, n: int) -> int:
        if n <= 0:
            return 0
        return int(self.next() * n)

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.randint_below(len(seq))]


__all__ = ["RandomSource"]
