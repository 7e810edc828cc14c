"""
Line-item descriptors — the typed, already-decoded form of a cash-flow
configuration. The engine consumes these; decoding raw documents lives in
data_prep/loader.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from distributions.base import Distribution

# Column order of per-draw simulation output.
RESULT_COLUMNS: Tuple[str, ...] = ("net", "inflow", "outflow")


@dataclass(frozen=True)
class GrowthDescriptor:
    """Periods at which the growth rate compounds, and its distribution."""
    periods: str
    dist: Distribution
    name: str = ""


@dataclass(frozen=True)
class CashflowDescriptor:
    """
    One configured line item.

    ``periods`` uses the period-spec grammar ("1-12,24"). ``growth`` is None
    when the line item does not grow.
    """
    name: str
    is_outflow: bool
    periods: str
    dist: Distribution
    growth: Optional[GrowthDescriptor] = None

    @property
    def direction(self) -> str:
        return "outflow" if self.is_outflow else "inflow"
