"""
noise.py
========

Random streams and the layered sine noise used by the wavy grid.

Every generator call owns its own ``random.Random``; nothing in the engine
touches the module-level ``random`` state, so concurrent calls never
interfere and a seeded call always reproduces the same geometry.
"""

import math
import random
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple, Union

import numpy as np

ArrayLike = Union[float, np.ndarray]


def rng_from_seed(seed: Optional[float]) -> random.Random:
    """Return a Random instance from seed (or system)."""
    r = random.Random()
    if seed is not None:
        r.seed(seed)
    else:
        r.seed()
    return r


def resolve_rng(rng: Optional[random.Random], seed: Optional[float]) -> random.Random:
    """Use an injected stream when given, otherwise a fresh one for ``seed``."""
    return rng if rng is not None else rng_from_seed(seed)


class NoiseSampler(Protocol):
    def sample(self, positions: ArrayLike) -> ArrayLike:
        ...


@dataclass(frozen=True)
class NoiseOffset:
    phase: float
    frequency: float
    amplitude: float


@dataclass(frozen=True)
class SineNoiseSampler:
    """Mean of a few phase-shifted sines: a cheap multi-octave approximation.

    Not gradient noise. Output stays within [-1, 1] because every offset
    amplitude is at most 1.
    """
    offsets: Tuple[NoiseOffset, ...]

    @classmethod
    def from_rng(cls, rng: random.Random, count: int = 3) -> "SineNoiseSampler":
        offsets = tuple(
            NoiseOffset(
                phase=rng.random() * math.pi * 2,
                frequency=0.5 + rng.random() * 1.5,
                amplitude=0.5 + rng.random() * 0.5,
            )
            for _ in range(max(1, count))
        )
        return cls(offsets)

    def sample(self, positions: ArrayLike) -> ArrayLike:
        p = np.asarray(positions, dtype=float)
        total = np.zeros_like(p)
        for off in self.offsets:
            total = total + np.sin(p * off.frequency + off.phase) * off.amplitude
        result = total / len(self.offsets)
        if result.ndim == 0:
            return float(result)
        return result


SamplerFactory = Callable[[random.Random], NoiseSampler]


def sine_sampler_factory(rng: random.Random) -> NoiseSampler:
    return SineNoiseSampler.from_rng(rng, count=3)
