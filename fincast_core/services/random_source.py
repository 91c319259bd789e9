from __future__ import annotations

import math
import sys
from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    def uniform(self) -> float:
        """Return a sample from [0, 1)."""
        ...


class NumpyRandomSource:
    """Uniform source backed by numpy's default PCG64 generator."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)

    def uniform(self) -> float:
        return float(self._rng.random())


def default_source(seed: Optional[int] = None) -> RandomSource:
    return NumpyRandomSource(seed)


def generate_normal(mean: float, std_dev: float, source: RandomSource) -> float:
    """
    Box-Muller transform: two uniforms in, one normal variate out.
    u1 is kept strictly positive so log(u1) stays finite.
    """
    u1 = max(source.uniform(), sys.float_info.min)
    u2 = source.uniform()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + std_dev * z0
