"""
Cash-flow decision support — probability statements and flags on simulation output.

Translates the draw distribution into answers an analyst can act on:
  Q1: "What do I expect to net?"        → mean / median net cash flow
  Q2: "How likely is a net loss?"       → P(net < 0)
  Q3: "How wide is the outcome range?"  → spread between P05 and P95 net
  Q4: "Is it worth it in present value?" → NPV / IRR of the mean per-period series
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd

from .cashflows import irr, npv, payback_period


@dataclass
class CashflowReport:
    """Structured summary of one simulation run."""
    name: str
    n_draws: int
    discount_rate: Optional[float]

    # Core metrics
    mean_net: float
    median_net: float
    mean_inflow: float
    mean_outflow: float

    # Tail risk
    p05_net: float
    p95_net: float
    worst_case_net: float
    prob_net_negative: float

    # Present value of the mean per-period series
    npv_mean_series: Optional[float]
    irr_mean_series: float
    payback_mean_series: float

    # Flags
    flags: List[str] = field(default_factory=list)

    @property
    def net_spread_5_95(self) -> float:
        return self.p95_net - self.p05_net

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Scenario", "Value": self.name},
            {"Metric": "Simulations", "Value": f"{self.n_draws:,d}"},
            {"Metric": "Mean Net Cash Flow", "Value": f"{self.mean_net:,.2f}"},
            {"Metric": "Median Net Cash Flow", "Value": f"{self.median_net:,.2f}"},
            {"Metric": "Mean Total Inflow", "Value": f"{self.mean_inflow:,.2f}"},
            {"Metric": "Mean Total Outflow", "Value": f"{self.mean_outflow:,.2f}"},
            {"Metric": "5th Pctl Net", "Value": f"{self.p05_net:,.2f}"},
            {"Metric": "95th Pctl Net", "Value": f"{self.p95_net:,.2f}"},
            {"Metric": "Worst Case Net", "Value": f"{self.worst_case_net:,.2f}"},
            {"Metric": "P(Net < 0)", "Value": f"{self.prob_net_negative:.1%}"},
            {"Metric": "IRR (mean series)", "Value": _fmt_rate(self.irr_mean_series)},
            {"Metric": "Payback (mean series)", "Value": _fmt_periods(self.payback_mean_series)},
        ]
        if self.discount_rate is not None and self.npv_mean_series is not None:
            rows.insert(2, {"Metric": "Discount Rate", "Value": f"{self.discount_rate:.2%}"})
            rows.append({"Metric": "NPV (mean series)", "Value": f"{self.npv_mean_series:,.2f}"})
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def _fmt_rate(value: float) -> str:
    return "N/A" if math.isnan(value) else f"{value:.2%}"


def _fmt_periods(value: float) -> str:
    return "never" if math.isnan(value) else f"{value:.2f} periods"


def generate_cashflow_report(
    net: np.ndarray,
    inflow: np.ndarray,
    outflow: np.ndarray,
    mean_period_net: np.ndarray,
    *,
    name: str = "Unnamed Scenario",
    discount_rate: Optional[float] = None,
) -> CashflowReport:
    """
    Build a report from per-draw totals and the mean per-period net series.

    Parameters
    ----------
    net, inflow, outflow : np.ndarray
        One value per draw (e.g. SimulationResults.net)
    mean_period_net : np.ndarray
        Mean net cash flow per period across draws
    name : str
        Scenario identifier for the report
    discount_rate : float, optional
        Per-period discount rate (e.g., 0.01 for 1% per month).
        If provided, computes the NPV of the mean series.
    """
    net = np.asarray(net, dtype=float)
    n = len(net)
    if n == 0:
        raise ValueError("No draws to generate report from.")

    p05 = float(np.percentile(net, 5))
    p95 = float(np.percentile(net, 95))
    prob_negative = float(np.mean(net < 0))
    mean_net = float(np.mean(net))

    series = np.asarray(mean_period_net, dtype=float)
    npv_series = npv(series, discount_rate) if discount_rate is not None else None

    flags = []
    if prob_negative > 0.10:
        flags.append(f"LOSS_RISK: {prob_negative:.0%} chance of negative net cash flow")
    if mean_net != 0.0 and (p95 - p05) > abs(mean_net):
        flags.append("HIGH_DISPERSION: P05-P95 net spread exceeds the mean")
    if npv_series is not None and npv_series < 0:
        flags.append("NEGATIVE_NPV: mean series does not cover the discount rate")

    return CashflowReport(
        name=name,
        n_draws=n,
        discount_rate=discount_rate,
        mean_net=mean_net,
        median_net=float(np.median(net)),
        mean_inflow=float(np.mean(inflow)),
        mean_outflow=float(np.mean(outflow)),
        p05_net=p05,
        p95_net=p95,
        worst_case_net=float(np.min(net)),
        prob_net_negative=prob_negative,
        npv_mean_series=npv_series,
        irr_mean_series=irr(series),
        payback_mean_series=payback_period(series),
        flags=flags,
    )
