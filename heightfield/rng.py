"""Seeded random sources for driving the generators."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import time

import numpy as np

from heightfield.diamond_square import RandomSource


def _normalize_seed(seed: int) -> int:
    return int(seed) & ((1 << 64) - 1)


def derive_seed(parent_seed: int, key: str, *, namespace: str = "heightfield-ds") -> int:
    """Derive a deterministic child seed from a parent seed and label."""

    payload = f"{namespace}:{_normalize_seed(parent_seed)}:{key}".encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=8, person=b"dsfork00").digest()
    return int.from_bytes(digest, byteorder="big", signed=False)


def clock_seed() -> int:
    """Seed taken from the wall clock, for runs that did not ask for one."""

    return _normalize_seed(time.time_ns())


@dataclass(frozen=True)
class RngStream:
    """Immutable seed that can be forked by name into independent streams."""

    seed: int
    namespace: str = "heightfield-ds"

    def fork(self, key: str) -> "RngStream":
        if not key:
            raise ValueError("fork key must be non-empty")
        return RngStream(derive_seed(self.seed, key, namespace=self.namespace), self.namespace)

    def generator(self) -> np.random.Generator:
        return np.random.Generator(np.random.PCG64(np.uint64(_normalize_seed(self.seed))))


def uniform_source(generator: np.random.Generator) -> RandomSource:
    """Return ``random(limit)`` drawing uniformly from ``[0, limit)``."""

    def random(limit: float) -> float:
        return float(generator.random()) * limit

    return random


class CountingSource:
    """Wraps a random source and counts how many draws were taken."""

    def __init__(self, source: RandomSource) -> None:
        self._source = source
        self.calls = 0

    def __call__(self, limit: float) -> float:
        self.calls += 1
        return self._source(limit)
