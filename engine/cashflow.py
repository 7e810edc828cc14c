"""
Two-phase cash-flow representation.

  CashflowTemplate  — non-random, built once per configuration: direction,
                      distributions, applicability mask, growth-trigger mask.
                      Shared read-only by every worker.
  CashflowInstance  — per-worker binding of a template to samplers plus the
                      running growth rate. Reset at the start of every draw.

Per-period value of an instance within one draw (periods in ascending order):
  1. not applicable  → 0.0, no sample consumed (value or growth)
  2. growth trigger  → growth_rate *= 1 + growth draw
  3. value draw * growth_rate
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from core.config import SimulationConfig
from core.errors import ConstructionError, PeriodSequenceError, PeriodSpecError
from core.schema import CashflowDescriptor
from core.utils import get_logger
from distributions.base import Distribution

from .periods import describe_periods, parse_periods

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class CashflowTemplate:
    name: str
    is_outflow: bool
    applicable: np.ndarray  # shape (horizon,), bool, read-only
    grow: np.ndarray        # shape (horizon,), bool, read-only
    dist: Distribution
    growth_dist: Optional[Distribution]
    start_period: int
    end_period: int

    def __post_init__(self):
        if len(self.applicable) != len(self.grow):
            raise ConstructionError(
                f"{self.name}: applicability mask has {len(self.applicable)} periods, "
                f"growth mask has {len(self.grow)}"
            )
        if self.growth_dist is None and self.grow.any():
            raise ConstructionError(f"{self.name}: growth triggers set without a growth distribution")

    @property
    def horizon(self) -> int:
        return len(self.applicable)

    @property
    def n_applicable(self) -> int:
        return int(self.applicable.sum())

    def describe(self) -> str:
        text = (
            f"{self.name} ({'outflow' if self.is_outflow else 'inflow'}): "
            f"periods [{describe_periods(self.applicable, self.start_period)}] {self.dist!r}"
        )
        if self.growth_dist is not None:
            text += (
                f", growth at [{describe_periods(self.grow, self.start_period)}]"
                f" {self.growth_dist!r}"
            )
        return text


def build_template(start: int, end: int, descriptor: CashflowDescriptor) -> CashflowTemplate:
    """
    Compute the applicability and growth-trigger masks for one line item.

    Period errors are re-raised tagged with the line item's name.
    """
    try:
        applicable = parse_periods(descriptor.periods, start, end)
        if descriptor.growth is None:
            grow = np.zeros_like(applicable)
            grow.flags.writeable = False
            growth_dist = None
        else:
            grow = parse_periods(descriptor.growth.periods, start, end)
            growth_dist = descriptor.growth.dist
    except PeriodSpecError as exc:
        logger.error("Error parsing periods for %s: %s", descriptor.name, exc.message)
        raise exc.with_line_item(descriptor.name) from exc

    if not isinstance(descriptor.dist, Distribution):
        raise ConstructionError(f"{descriptor.name}: value distribution is not a Distribution")
    if growth_dist is not None and not isinstance(growth_dist, Distribution):
        raise ConstructionError(f"{descriptor.name}: growth distribution is not a Distribution")

    template = CashflowTemplate(
        name=descriptor.name,
        is_outflow=bool(descriptor.is_outflow),
        applicable=applicable,
        grow=grow,
        dist=descriptor.dist,
        growth_dist=growth_dist,
        start_period=int(start),
        end_period=int(end),
    )
    logger.debug("Built template %s", template.describe())
    return template


def build_templates(config: SimulationConfig) -> Tuple[CashflowTemplate, ...]:
    """Build every line item of a configuration, in configuration order."""
    templates = tuple(
        build_template(config.start_period, config.end_period, d) for d in config.cashflows
    )
    logger.info("Done setting up %d cash-flow templates", len(templates))
    return templates


class CashflowInstance:
    """
    A template bound to concrete samplers for one worker.

    The value sampler is bound before the growth sampler; both draw from the
    worker's generator. growth_rate is the only mutable state and belongs to
    this instance alone.
    """

    def __init__(self, template: CashflowTemplate, rng: np.random.Generator):
        self.template = template
        self.value_sampler = template.dist.bind(rng)
        self.growth_sampler = (
            template.growth_dist.bind(rng) if template.growth_dist is not None else None
        )
        self.growth_rate = 1.0
        self._last_index = -1

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def is_outflow(self) -> bool:
        return self.template.is_outflow

    def reset_for_new_draw(self) -> None:
        self.growth_rate = 1.0
        self._last_index = -1

    def value(self, period_index: int) -> float:
        """
        Value for the period at ``period_index`` (0 = first period of the horizon).

        Index 0 starts a new draw. Within a draw indexes must strictly increase,
        because growth compounds from one call to the next.
        """
        if period_index < 0 or period_index >= self.template.horizon:
            raise IndexError(
                f"period index {period_index} outside horizon of {self.template.horizon} periods"
            )
        if period_index == 0:
            self.reset_for_new_draw()
        elif period_index <= self._last_index:
            raise PeriodSequenceError(
                f"{self.name}: period index {period_index} requested after {self._last_index}; "
                f"call reset_for_new_draw() to start a new draw"
            )
        self._last_index = period_index

        if not self.template.applicable[period_index]:
            return 0.0
        if self.template.grow[period_index]:
            self.growth_rate *= 1.0 + self.growth_sampler.draw()
        return self.value_sampler.draw() * self.growth_rate

    def draw_series(self) -> np.ndarray:
        """One complete draw over the horizon, as a per-period vector."""
        self.reset_for_new_draw()
        return np.array([self.value(i) for i in range(self.template.horizon)], dtype=float)


def bind_instances(
    templates: Iterable[CashflowTemplate], rng: np.random.Generator
) -> List[CashflowInstance]:
    """Bind every template to the same generator, in template order."""
    return [CashflowInstance(t, rng) for t in templates]
