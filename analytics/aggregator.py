"""
Aggregate per-draw results into distribution summaries.

Instead of: "Net cash flow = 1,200" (one number, no context)
The analyst gets: "Net: mean=1,180, P05=640, P95=1,730, worst=210"
"""

from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
import pandas as pd

from core.utils import require_columns

DEFAULT_PERCENTILES: Tuple[float, ...] = (0.01, 0.05, 0.25, 0.50, 0.75, 0.95, 0.99)


def summarize_draws(
    draws: pd.DataFrame,
    *,
    percentiles: Tuple[float, ...] = DEFAULT_PERCENTILES,
) -> pd.DataFrame:
    """
    One row per measure (Net, Inflow, Outflow) with mean, spread and percentiles.

    Parameters
    ----------
    draws : pd.DataFrame
        One row per draw. Required columns: net, inflow, outflow
    percentiles : tuple of float
        Percentile levels to report, in [0, 1]
    """
    measures = {
        "Net Cash Flow": "net",
        "Total Inflow": "inflow",
        "Total Outflow": "outflow",
    }
    require_columns(draws, measures.values())

    rows = []
    for label, col in measures.items():
        values = draws[col].dropna().to_numpy(dtype=float)
        if len(values) == 0:
            continue

        row = {
            "Metric": label,
            "Mean": float(np.mean(values)),
            "Std Dev": float(np.std(values)),
            "Min": float(np.min(values)),
        }
        for p in percentiles:
            row[percentile_label(p)] = float(np.percentile(values, p * 100))
        row["Max"] = float(np.max(values))
        rows.append(row)

    return pd.DataFrame(rows)


def percentile_label(p: float) -> str:
    return f"P{int(round(p * 100)):02d}"


def histogram(values: np.ndarray, *, bins: int = 20) -> Dict[str, np.ndarray]:
    """Bin counts and edges for plotting a draw distribution."""
    counts, edges = np.histogram(np.asarray(values, dtype=float), bins=bins)
    return {"counts": counts, "edges": edges}
