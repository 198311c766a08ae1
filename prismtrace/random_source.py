"""
Random sources for the tracer.

The engine needs only two things from randomness: a uniform real in
[0, 1) and a random unit vector built from it. Any generator that
provides them can be plugged in:

- SystemRandomSource: numpy's PCG64 generator
- LFSRRandomSource: a deterministic 16-bit shift register
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .vec3 import Vec3

LFSR_MODULUS = 1 << 16
LFSR_MASK = LFSR_MODULUS - 1


class RandomSource(ABC):
    """Abstract base class for random sources.

    A single instance is not safe to share between threads; use
    ``spawn`` to hand each worker its own stream.
    """

    @abstractmethod
    def random(self) -> float:
        """Return a uniform real in [0, 1)."""

    @abstractmethod
    def spawn(self, key: int) -> RandomSource:
        """Return an independent child stream identified by ``key``."""

    def random_vec3(self) -> Vec3:
        """Vector with each component uniform in [-0.5, 0.5)."""
        return Vec3(self.random() - 0.5, self.random() - 0.5, self.random() - 0.5)

    def random_unit_vector(self) -> Vec3:
        return self.random_vec3().unit()


class SystemRandomSource(RandomSource):
    """Random source backed by ``numpy.random.Generator``."""

    def __init__(self, seed: Optional[int] = None):
        self._seed_seq = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seed_seq)

    def random(self) -> float:
        return float(self._rng.random())

    def spawn(self, key: int) -> SystemRandomSource:
        child = SystemRandomSource.__new__(SystemRandomSource)
        child._seed_seq = np.random.SeedSequence(
            self._seed_seq.entropy,
            spawn_key=self._seed_seq.spawn_key + (key,)
        )
        child._rng = np.random.default_rng(child._seed_seq)
        return child


@dataclass(frozen=True)
class LFSR16:
    """A 16-bit xorshift register. ``shift`` returns the next state."""
    state: int

    def __post_init__(self):
        if not 0 < self.state <= LFSR_MASK:
            raise ValueError(f"LFSR seed must be a non-zero 16-bit value, got {self.state}")

    def shift(self) -> LFSR16:
        nxt = self.state
        nxt ^= nxt >> 7
        nxt ^= (nxt << 9) & LFSR_MASK
        nxt ^= nxt >> 13
        return LFSR16(nxt)


class LFSRRandomSource(RandomSource):
    """Deterministic random source stepping an ``LFSR16``.

    Each call advances the register once and returns the new state
    scaled into [0, 1).
    """

    def __init__(self, seed: int = 0xACE1):
        self._register = LFSR16(seed)

    @property
    def state(self) -> int:
        return self._register.state

    def next_uint16(self) -> int:
        self._register = self._register.shift()
        return self._register.state

    def random(self) -> float:
        return self.next_uint16() / LFSR_MODULUS

    def spawn(self, key: int) -> LFSRRandomSource:
        # Mix the key into the seed; zero is the register's one dead state.
        seed = (self.state ^ ((key * 0x9E37) & LFSR_MASK)) or 1
        return LFSRRandomSource(seed)


def random_range_vec3(rng: RandomSource, lo: float, hi: float) -> Vec3:
    """Vector with each component uniform in [lo, hi); zero if lo >= hi."""
    if lo >= hi:
        return Vec3()
    span = hi - lo
    return Vec3(
        rng.random() * span + lo,
        rng.random() * span + lo,
        rng.random() * span + lo
    )


def create_random_source(kind: str = 'system', seed: Optional[int] = None) -> RandomSource:
    """Factory for random sources by name."""
    if kind == 'system':
        return SystemRandomSource(seed)
    if kind == 'lfsr':
        return LFSRRandomSource(seed if seed is not None else 0xACE1)
    raise ValueError(f"Unknown random source: {kind}")
