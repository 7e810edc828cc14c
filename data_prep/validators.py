"""
Configuration validation before any simulation work is spent.

Catches problems early:
- Period specs that are malformed or outside the horizon
- Line items that can never contribute
- Growth triggers that can never fire
- More workers than simulations
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import List

import numpy as np

from core.config import SimulationConfig
from core.errors import ConstructionError, PeriodSpecError
from engine.cashflow import build_template
from engine.periods import describe_periods


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a configuration."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_config(config: SimulationConfig) -> ValidationResult:
    """
    Run all validation checks on a simulation configuration.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    """
    result = ValidationResult()

    if not config.cashflows:
        result.errors.append("Configuration has no cash flows.")
        return result

    # --- Names ---
    counts = Counter(cf.name for cf in config.cashflows)
    for name, n in counts.items():
        if not name:
            result.warnings.append(f"{n} cash flow(s) have an empty name.")
        elif n > 1:
            result.warnings.append(f"Cash flow name {name!r} is used {n} times.")

    # --- Templates (period specs) ---
    for cf in config.cashflows:
        try:
            template = build_template(config.start_period, config.end_period, cf)
        except (PeriodSpecError, ConstructionError) as exc:
            result.errors.append(str(exc))
            continue

        if template.n_applicable == 0:
            result.warnings.append(f"{cf.name}: never applicable (empty period spec).")

        if template.growth_dist is None:
            continue
        if not template.grow.any():
            result.warnings.append(f"{cf.name}: growth is configured but never triggers.")
        idle = template.grow & ~template.applicable
        if idle.any():
            result.warnings.append(
                f"{cf.name}: growth triggers on non-applicable periods "
                f"[{describe_periods(idle, config.start_period)}] are skipped."
            )
        first = int(np.argmax(template.applicable)) if template.n_applicable else -1
        if first >= 0 and template.grow[first]:
            result.warnings.append(
                f"{cf.name}: growth triggers in its first applicable period "
                f"{config.start_period + first}."
            )

    # --- Parallelism ---
    if config.n_workers > config.n_sims:
        result.warnings.append(
            f"{config.n_workers} workers for {config.n_sims} simulations; "
            f"{config.n_workers - config.n_sims} worker(s) will be idle."
        )

    return result
