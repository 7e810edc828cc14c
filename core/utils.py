from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd

_logging_configured = False


def get_logger(name: str = "cashflow_mc") -> logging.Logger:
    """
    Get a logger, configuring logging.basicConfig once (INFO level) on first call.
    """
    global _logging_configured

    if not _logging_configured:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        _logging_configured = True

    return logging.getLogger(name)


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def horizon_length(start_period: int, end_period: int) -> int:
    """Number of periods in the inclusive range [start_period, end_period]."""
    return int(end_period) - int(start_period) + 1
