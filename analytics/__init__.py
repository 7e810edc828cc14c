"""
Analytics — distribution summaries, cash-flow metrics, and decision support.
"""

from .aggregator import summarize_draws, histogram
from .cashflows import (
    npv,
    ncf,
    irr,
    mirr,
    payback_period,
    discounted_payback_period,
)
from .report import CashflowReport, generate_cashflow_report

__all__ = [
    "summarize_draws",
    "histogram",
    "npv",
    "ncf",
    "irr",
    "mirr",
    "payback_period",
    "discounted_payback_period",
    "CashflowReport",
    "generate_cashflow_report",
]
