"""
Supported distribution variants.

    Fixed(value)                        constant, no constraints
    Triangle(min_val, max_val, mode)    redrawn on every call
    TriangleOnce(min_val, max_val, mode) drawn once at bind, then constant
    PERT(min_val, max_val, mode)        redrawn on every call
    PERTOnce(min_val, max_val, mode)    drawn once at bind, then constant
    Uniform(min_val, max_val)           redrawn on every call

Triangle and PERT families require min < max and min <= mode <= max.
Uniform requires min <= max. Violations raise ConstructionError when the
variant is constructed, never later during a draw.

The "Once" variants are bound once per worker, so every draw made by that
worker sees the same value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Type

import numpy as np

from core.errors import ConstructionError

from .base import Distribution, Sampler
from .sampler import FixedSampler, PERTSampler, TriangleSampler, UniformSampler


def _as_finite(name: str, value: float, family: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise ConstructionError(f"{family} parameter {name} must be a number, got {value!r}") from exc
    if not math.isfinite(out):
        raise ConstructionError(f"{family} parameter {name} must be finite, got {value!r}")
    return out


@dataclass(frozen=True)
class Fixed(Distribution):
    value: float
    type_tag = "fixed"

    def validate(self) -> None:
        try:
            value = float(self.value)
        except (TypeError, ValueError) as exc:
            raise ConstructionError(f"fixed value must be a number, got {self.value!r}") from exc
        object.__setattr__(self, "value", value)

    def bind(self, rng: np.random.Generator) -> Sampler:
        return FixedSampler(self.value)


@dataclass(frozen=True)
class _ThreePoint(Distribution):
    min_val: float
    max_val: float
    mode: float

    family = "three-point"

    def validate(self) -> None:
        lo = _as_finite("min", self.min_val, self.family)
        hi = _as_finite("max", self.max_val, self.family)
        mode = _as_finite("mode", self.mode, self.family)
        if lo >= hi:
            raise ConstructionError(f"{self.family} constraint of min < max violated ({lo} >= {hi})")
        if mode < lo:
            raise ConstructionError(f"{self.family} constraint of min <= mode violated ({mode} < {lo})")
        if mode > hi:
            raise ConstructionError(f"{self.family} constraint of mode <= max violated ({mode} > {hi})")
        object.__setattr__(self, "min_val", lo)
        object.__setattr__(self, "max_val", hi)
        object.__setattr__(self, "mode", mode)


@dataclass(frozen=True)
class Triangle(_ThreePoint):
    type_tag = "tri"
    family = "triangle"

    def bind(self, rng: np.random.Generator) -> Sampler:
        return TriangleSampler(rng, self.min_val, self.max_val, self.mode)


@dataclass(frozen=True)
class TriangleOnce(_ThreePoint):
    type_tag = "tri_one"
    family = "triangle"

    def bind(self, rng: np.random.Generator) -> Sampler:
        once = TriangleSampler(rng, self.min_val, self.max_val, self.mode).draw()
        return FixedSampler(once)


@dataclass(frozen=True)
class PERT(_ThreePoint):
    type_tag = "pert"
    family = "pert"

    def bind(self, rng: np.random.Generator) -> Sampler:
        return PERTSampler(rng, self.min_val, self.max_val, self.mode)


@dataclass(frozen=True)
class PERTOnce(_ThreePoint):
    type_tag = "pert_one"
    family = "pert"

    def bind(self, rng: np.random.Generator) -> Sampler:
        once = PERTSampler(rng, self.min_val, self.max_val, self.mode).draw()
        return FixedSampler(once)


@dataclass(frozen=True)
class Uniform(Distribution):
    min_val: float
    max_val: float
    type_tag = "uniform"

    def validate(self) -> None:
        lo = _as_finite("min", self.min_val, "uniform")
        hi = _as_finite("max", self.max_val, "uniform")
        if lo > hi:
            raise ConstructionError(f"uniform constraint of min <= max violated ({lo} > {hi})")
        object.__setattr__(self, "min_val", lo)
        object.__setattr__(self, "max_val", hi)

    def bind(self, rng: np.random.Generator) -> Sampler:
        return UniformSampler(rng, self.min_val, self.max_val)


# Closed set of variants, keyed by the type tag used in configuration files.
DISTRIBUTION_TYPES: Dict[str, Type[Distribution]] = {
    cls.type_tag: cls for cls in (Fixed, Triangle, TriangleOnce, PERT, PERTOnce, Uniform)
}
