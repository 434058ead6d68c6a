"""Domain-separated deterministic RNG using xxhash.

The outcome of a run depends ONLY on the seed and the wave plan:
every draw is a pure function of (seed, domain, key, counter), so the
order in which independent consumers draw never leaks between them.

Formula: RNG_Value = Hash(Seed, Domain, Key, Counter)
"""

from __future__ import annotations

import struct

import xxhash

from wavespawn.core.enums import Domain


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, key, counter);
    no internal mutable state, therefore fully thread-safe.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, counter: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, key, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, key: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, key, counter) / (self._MAX_UINT64 + 1)

    def next_uniform(self, domain: Domain, key: int, counter: int, low: float, high: float) -> float:
        """Return a deterministic float in [low, high)."""
        return low + (high - low) * self.next_float(domain, key, counter)

    def stream(self, domain: Domain, key: int = 0) -> RandomStream:
        return RandomStream(self, domain, key)


class RandomStream:
    """Sequential view over one (domain, key) lane of a DeterministicRNG.

    Exposes ``uniform(low, high)`` like ``random.Random`` so consumers can
    take either as their randomness source.
    """

    __slots__ = ("_rng", "_domain", "_key", "_counter")

    def __init__(self, rng: DeterministicRNG, domain: Domain, key: int = 0) -> None:
        self._rng = rng
        self._domain = domain
        self._key = key
        self._counter = 0

    @property
    def draws(self) -> int:
        return self._counter

    def uniform(self, low: float, high: float) -> float:
        value = self._rng.next_uniform(self._domain, self._key, self._counter, low, high)
        self._counter += 1
        return value
