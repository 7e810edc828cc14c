"""
Base classes for distributions and samplers.
Just the interface — the concrete variants are in variants.py.
"""

from __future__ import annotations

from typing import ClassVar

import numpy as np


class Sampler:
    """A random variable bound to one generator; each draw() advances it."""

    def draw(self) -> float:
        raise NotImplementedError


class Distribution:
    """
    Immutable description of a random variable, without a random source.

    Subclasses are frozen dataclasses. validate() runs from __post_init__, so
    an invalid parameter set can never be constructed.
    """

    type_tag: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        raise NotImplementedError

    def bind(self, rng: np.random.Generator) -> Sampler:
        raise NotImplementedError
