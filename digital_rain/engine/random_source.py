# digital_rain/engine/random_source.py

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class RandomSource(random.Random):
    """
    Uniform pseudo-random source used by the rain engine.

    Every widget owns one; pass an explicit seed for reproducible frames.
    """

    def next_u32(self) -> int:
        return self.getrandbits(32)

    def gen_range(self, lo: int, hi: int) -> int:
        """Uniform integer in the half-open range [lo, hi)."""
        return self.randrange(lo, hi)

    def choose(self, seq: Sequence[T]) -> T:
        return self.choice(seq)

    def gen_bool(self, p: float) -> bool:
        return self.random() < p
