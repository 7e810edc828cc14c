"""
Simulation output: one (net, inflow, outflow) triple per draw.

Draws are exchangeable, so only the multiset of values carries meaning; the
orchestrator still fills the arrays in a fixed order so identical runs are
bit-identical.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from analytics.aggregator import summarize_draws
from core.schema import RESULT_COLUMNS


@dataclass
class SimulationResults:
    net: np.ndarray              # shape (n_draws,)
    inflow: np.ndarray           # shape (n_draws,)
    outflow: np.ndarray          # shape (n_draws,)
    mean_period_net: np.ndarray  # shape (horizon,), mean net cash flow per period
    start_period: int = 1
    n_workers: int = 1
    seed: int = 0

    @property
    def n_draws(self) -> int:
        return len(self.net)

    @property
    def horizon(self) -> int:
        return len(self.mean_period_net)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({
            "draw": np.arange(self.n_draws),
            RESULT_COLUMNS[0]: self.net,
            RESULT_COLUMNS[1]: self.inflow,
            RESULT_COLUMNS[2]: self.outflow,
        })

    def period_frame(self) -> pd.DataFrame:
        """Mean net cash flow per period across all draws."""
        return pd.DataFrame({
            "period": np.arange(self.start_period, self.start_period + self.horizon),
            "mean_net": self.mean_period_net,
        })

    def summary(self) -> pd.DataFrame:
        """Percentile summary of net, inflow and outflow."""
        return summarize_draws(self.to_dataframe())
