"""
Simulation configuration.
Distribution parameters live on the line-item descriptors (core/schema.py).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .errors import ConfigurationError
from .schema import CashflowDescriptor
from .utils import horizon_length


@dataclass(frozen=True)
class SimulationConfig:
    start_period: int
    end_period: int
    n_sims: int
    cashflows: Tuple[CashflowDescriptor, ...] = field(default_factory=tuple)
    name: str = ""

    # parallelism / reproducibility
    n_workers: int = 1
    seed: int = 7

    def __post_init__(self):
        # accept any iterable of descriptors, store as a tuple
        object.__setattr__(self, "cashflows", tuple(self.cashflows))
        if self.start_period < 0:
            raise ConfigurationError(
                f"start period {self.start_period} is negative; periods are non-negative"
            )
        if self.start_period > self.end_period:
            raise ConfigurationError(
                f"start period {self.start_period} must be less than or equal to "
                f"end period {self.end_period}"
            )
        if self.n_sims < 1:
            raise ConfigurationError("n_sims must be positive")
        if self.n_workers < 1:
            raise ConfigurationError("n_workers must be positive")
        if self.seed < 0:
            raise ConfigurationError("seed must be non-negative")

    @property
    def horizon(self) -> int:
        return horizon_length(self.start_period, self.end_period)
