"""
Closed-form analytics on a single cash-flow series.

Series are in period order; index 0 is the initial (undiscounted) cash flow.
Functions that can have no answer (IRR, payback) return NaN rather than raise.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy import optimize


def npv(cashflows: Sequence[float], k: float) -> float:
    """
    Net Present Value at discount rate ``k``.

    NPV = sum(CF_t / (1+k)^t) for t = 0..n
    """
    cfs = np.asarray(cashflows, dtype=float)
    t = np.arange(len(cfs), dtype=float)
    return float(np.sum(cfs / np.power(1.0 + k, t)))


def ncf(cashflows: Sequence[float]) -> float:
    """Net cash flow — the plain sum of the series."""
    return float(np.sum(np.asarray(cashflows, dtype=float)))


def irr(
    cashflows: Sequence[float],
    *,
    rel_tol: float = 1e-8,
    max_iterations: int = 100,
    guess: float = 0.1,
) -> float:
    """
    Internal Rate of Return — the rate at which NPV is zero — via Newton's method.

    Returns NaN when the series never changes sign (no IRR exists) or when the
    solver does not converge within ``max_iterations``.
    """
    cfs = np.asarray(cashflows, dtype=float)
    if len(cfs) < 2 or not (np.any(cfs > 0) and np.any(cfs < 0)):
        return math.nan
    t = np.arange(len(cfs), dtype=float)

    def f(k: float) -> float:
        return float(np.sum(cfs * np.power(1.0 + k, -t)))

    def fprime(k: float) -> float:
        return float(np.sum(-t * cfs * np.power(1.0 + k, -t - 1.0)))

    with np.errstate(all="ignore"):
        root, info = optimize.newton(
            f,
            guess,
            fprime=fprime,
            rtol=rel_tol,
            maxiter=max_iterations,
            full_output=True,
            disp=False,
        )
    if not info.converged or not math.isfinite(root) or root <= -1.0:
        return math.nan
    return float(root)


def mirr(cashflows: Sequence[float], k: float) -> float:
    """
    Modified IRR: outflows are discounted to present value at ``k``, inflows are
    compounded to a terminal value at ``k``.

    MIRR = (TV inflows / PV outflows)^(1/n) - 1

    Returns +inf when the series has no outflows.
    """
    cfs = np.asarray(cashflows, dtype=float)
    n = len(cfs) - 1
    if n < 1:
        return math.nan
    t = np.arange(len(cfs), dtype=float)
    inflows = cfs > 0
    tv = float(np.sum(cfs[inflows] * np.power(1.0 + k, n - t[inflows])))
    pv_costs = float(-np.sum(cfs[~inflows] / np.power(1.0 + k, t[~inflows])))
    if pv_costs == 0.0:
        return math.inf
    return (tv / pv_costs) ** (1.0 / n) - 1.0


def payback_period(cashflows: Sequence[float]) -> float:
    """
    Periods required to recover the initial investment, interpolated within the
    recovering period. NaN if it is never paid back.
    """
    return _payback(np.asarray(cashflows, dtype=float))


def discounted_payback_period(cashflows: Sequence[float], k: float) -> float:
    """Payback period on cash flows discounted at ``k``. NaN if never paid back."""
    cfs = np.asarray(cashflows, dtype=float)
    t = np.arange(len(cfs), dtype=float)
    return _payback(cfs / np.power(1.0 + k, t))


def _payback(cfs: np.ndarray) -> float:
    cumulative = 0.0
    for i, cf in enumerate(cfs):
        if cumulative + cf >= 0.0:
            # nothing invested yet
            if cumulative == 0.0:
                return 0.0
            return float(i - 1) - cumulative / float(cf)
        cumulative += float(cf)
    return math.nan
