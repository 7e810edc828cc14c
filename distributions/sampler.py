"""
Samplers — distributions bound to a numpy Generator.

Each sampler holds a reference to the generator it was bound with; several
samplers may share one generator (one per worker), in which case their draws
interleave on the same stream.

PERT uses the standard beta-PERT with lambda = 4:
    alpha = 1 + 4 (mode - min) / (max - min)
    beta  = 1 + 4 (max - mode) / (max - min)
    X     = min + (max - min) * Beta(alpha, beta)
"""

from __future__ import annotations

import numpy as np

from .base import Sampler

PERT_LAMBDA = 4.0


class FixedSampler(Sampler):
    """Returns the same value on every draw and never touches a generator."""

    def __init__(self, value: float):
        self.value = float(value)

    def draw(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"FixedSampler({self.value!r})"


class TriangleSampler(Sampler):
    def __init__(self, rng: np.random.Generator, min_val: float, max_val: float, mode: float):
        self.rng = rng
        self.min_val = float(min_val)
        self.max_val = float(max_val)
        self.mode = float(mode)

    def draw(self) -> float:
        return float(self.rng.triangular(self.min_val, self.mode, self.max_val))


class PERTSampler(Sampler):
    def __init__(self, rng: np.random.Generator, min_val: float, max_val: float, mode: float):
        self.rng = rng
        self.min_val = float(min_val)
        self.max_val = float(max_val)
        self.mode = float(mode)
        span = self.max_val - self.min_val
        self.alpha = 1.0 + PERT_LAMBDA * (self.mode - self.min_val) / span
        self.beta = 1.0 + PERT_LAMBDA * (self.max_val - self.mode) / span
        self._span = span

    @property
    def mean(self) -> float:
        return (self.min_val + PERT_LAMBDA * self.mode + self.max_val) / (PERT_LAMBDA + 2.0)

    def draw(self) -> float:
        return self.min_val + self._span * float(self.rng.beta(self.alpha, self.beta))


class UniformSampler(Sampler):
    def __init__(self, rng: np.random.Generator, min_val: float, max_val: float):
        self.rng = rng
        self.min_val = float(min_val)
        self.max_val = float(max_val)

    def draw(self) -> float:
        return float(self.rng.uniform(self.min_val, self.max_val))
