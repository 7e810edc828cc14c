"""
Distributions package — validated random-variable descriptions and the samplers
they bind to.

  1. base.py      — Distribution / Sampler interfaces
  2. variants.py  — Fixed, Triangle, TriangleOnce, PERT, PERTOnce, Uniform
  3. sampler.py   — generator-backed samplers produced by bind()
"""

from .base import Distribution, Sampler
from .variants import (
    DISTRIBUTION_TYPES,
    Fixed,
    Triangle,
    TriangleOnce,
    PERT,
    PERTOnce,
    Uniform,
)
from .sampler import FixedSampler, TriangleSampler, PERTSampler, UniformSampler

__all__ = [
    "Distribution",
    "Sampler",
    "DISTRIBUTION_TYPES",
    "Fixed",
    "Triangle",
    "TriangleOnce",
    "PERT",
    "PERTOnce",
    "Uniform",
    "FixedSampler",
    "TriangleSampler",
    "PERTSampler",
    "UniformSampler",
]
