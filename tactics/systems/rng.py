"""Domain-separated deterministic RNG using xxhash.

The same seed always produces the same battlefield: every random draw is a
pure function of (seed, domain, key, index), so the order in which callers
ask for values does not matter.

Formula: RNG_Value = Hash(Seed, Domain, Key, Index)
"""

from __future__ import annotations

import struct

import xxhash

from tactics.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, index: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, index)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, index: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, index) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, key: int, index: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, index)
        return low + int(f * (high - low + 1))

    def shuffled(self, domain: Domain, key: int, items: list[int]) -> list[int]:
        """Fisher-Yates shuffle of a copy of *items*, one draw per position."""
        out = list(items)
        for i in range(len(out) - 1, 0, -1):
            j = self.next_int(domain, key, i, 0, i)
            out[i], out[j] = out[j], out[i]
        return out
