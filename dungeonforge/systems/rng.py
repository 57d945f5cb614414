"""Seekable deterministic RNG stream using xxhash.

Draw *n* of a stream is a pure function of (seed, domain, n):

    value_n = xxh64(seed, domain, n)

so the stream can be rewound with :meth:`DeterministicRNG.seek` or restarted
under a new seed with :meth:`DeterministicRNG.reseed`, and two streams built
from the same seed always agree draw for draw.
"""

from __future__ import annotations

import struct
from typing import MutableSequence, Sequence, TypeVar

import xxhash

T = TypeVar("T")

_MASK64 = (1 << 64) - 1


class DeterministicRNG:
    """Counter-based pseudo-random stream.

    Seeds may be integers or strings; strings are hashed with xxh64 first
    so ``"test-seed-1"`` is as good a seed as ``42``.
    """

    __slots__ = ("_seed", "_domain", "_cursor")

    _FLOAT_SCALE = 1.0 / (1 << 53)

    def __init__(self, seed: int | str, domain: int = 0) -> None:
        self._seed = self.seed_to_int(seed)
        self._domain = domain
        self._cursor = 0

    @staticmethod
    def seed_to_int(seed: int | str) -> int:
        if isinstance(seed, str):
            return xxhash.xxh64(seed.encode("utf-8")).intdigest()
        return seed & _MASK64

    # -- stream position --

    @property
    def seed(self) -> int:
        return self._seed

    def tell(self) -> int:
        return self._cursor

    def seek(self, position: int) -> None:
        if position < 0:
            raise ValueError("stream position must not be negative")
        self._cursor = position

    def reseed(self, seed: int | str) -> None:
        self._seed = self.seed_to_int(seed)
        self._cursor = 0

    # -- draws --

    def _next(self) -> int:
        payload = struct.pack("<QiQ", self._seed, self._domain, self._cursor)
        self._cursor += 1
        return xxhash.xxh64(payload).intdigest()

    def next_float(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return (self._next() >> 11) * self._FLOAT_SCALE

    random = next_float

    def randrange(self, low: int, high: int) -> int:
        """Return an integer in [low, high). An empty range yields ``low``."""
        if high <= low:
            return low
        return low + int(self.next_float() * (high - low))

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in [low, high] inclusive."""
        return self.randrange(low, high + 1)

    randint = next_int

    def chance(self, percent: int) -> bool:
        """Percent roll: True when a draw in [0, 100) falls below ``percent``."""
        return self.randrange(0, 100) < percent

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.randrange(0, len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randrange(0, i + 1)
            items[i], items[j] = items[j], items[i]


def parse_seed(text: str) -> int | str:
    """Seeds typed by a user: decimal digits become ints, anything else stays a string."""
    stripped = text.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return text
