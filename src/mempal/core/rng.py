from __future__ import annotations

import hashlib
import random
import time
from typing import Sequence, TypeVar

T = TypeVar("T")


class SeededRandom:
    """
    Deterministic RNG wrapper around random.Random.

    Every stochastic generation step receives one of these explicitly; nothing
    in mempal touches Python's global RNG. The same seed always yields the same
    sequence, which is what lets a portal room be regenerated on demand.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next(self) -> float:
        """Return the next random float in the range [0.0, 1.0)."""
        return self._rng.random()

    def int_range(self, min_inclusive: int, max_exclusive: int) -> int:
        """Return a random integer N such that min_inclusive <= N < max_exclusive."""
        return self._rng.randrange(min_inclusive, max_exclusive)

    def pick(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot pick from an empty sequence")
        return seq[self._rng.randrange(len(seq))]

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._seed})"


def seed_from_string(text: str) -> int:
    """Derive a stable 32-bit seed from an arbitrary string using SHA256."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False) & 0xFFFFFFFF


def time_seed() -> int:
    """Seed for callers that did not supply one (millisecond wall clock)."""
    return time.time_ns() // 1_000_000
