"""
Simulation runner — partitions draws across workers and aggregates results.

Flow:
  1. calc_sims_per_cpu()  — near-even split of n_sims over n_workers
  2. worker_seed()        — distinct, deterministic seed per worker
  3. joblib pool          — one run_worker_block() task per non-empty worker
  4. fan-in               — results are consumed as workers finish and written
                            at each worker's fixed offset, so the output does
                            not depend on completion order

A run either returns exactly n_sims draws or raises; partial output is never
returned.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from joblib import Parallel, delayed

from core.config import SimulationConfig
from core.errors import ConstructionError, PartitionInvariantError, WorkerFailure
from core.utils import get_logger

from .cashflow import CashflowTemplate, build_templates
from .results import SimulationResults
from .worker import WorkerResult, run_worker_block

logger = get_logger(__name__)

# Large odd stride between worker seeds (64-bit golden ratio constant).
SEED_STRIDE = 0x9E3779B97F4A7C15
_SEED_MODULUS = 2 ** 64


def calc_sims_per_cpu(sims: int, cpus: int) -> List[int]:
    """
    Split ``sims`` draws over ``cpus`` workers as evenly as possible.

    The first ``sims % cpus`` workers take one extra draw:
        calc_sims_per_cpu(11, 3) -> [4, 4, 3]
        calc_sims_per_cpu(22, 4) -> [6, 6, 5, 5]
    """
    if sims < 1:
        raise ValueError("sims must be positive")
    if cpus < 1:
        raise ValueError("cpus must be positive")

    per_cpu, leftovers = divmod(sims, cpus)
    partition = [per_cpu + 1 if i < leftovers else per_cpu for i in range(cpus)]
    check_partition(partition, sims)
    return partition


def check_partition(partition: Sequence[int], sims: int) -> None:
    total = sum(partition)
    if total != sims:
        raise PartitionInvariantError(
            f"partition {list(partition)} sums to {total}, expected {sims}"
        )
    if any(n < 0 for n in partition):
        raise PartitionInvariantError(f"partition {list(partition)} has negative entries")


def worker_seed(base_seed: int, worker_index: int) -> int:
    """Seed for worker ``worker_index``, derived from the run's base seed."""
    return (int(base_seed) + int(worker_index) * SEED_STRIDE) % _SEED_MODULUS


def run_simulation(
    templates: Sequence[CashflowTemplate],
    n_sims: int,
    n_workers: int = 1,
    seed: int = 7,
    *,
    backend: str = "loky",
) -> SimulationResults:
    """
    Run ``n_sims`` independent draws of every template across ``n_workers``.

    Parameters
    ----------
    templates : sequence of CashflowTemplate
        Read-only line items, all sharing one horizon
    n_sims : int
        Total number of draws
    n_workers : int
        Number of parallel workers (each gets its own generator)
    seed : int
        Base seed; the same (n_sims, n_workers, seed, templates) reproduces
        bit-identical output
    backend : str
        joblib backend — "loky" (processes, default) or "threading"

    Returns
    -------
    SimulationResults with net / inflow / outflow per draw and the mean net
    cash flow per period.
    """
    templates = tuple(templates)
    if not templates:
        raise ConstructionError("at least one cash-flow template is required")
    horizons = {t.horizon for t in templates}
    starts = {t.start_period for t in templates}
    if len(horizons) != 1 or len(starts) != 1:
        raise ConstructionError("all cash-flow templates must share the same horizon")
    horizon = horizons.pop()

    partition = calc_sims_per_cpu(n_sims, n_workers)
    offsets = np.concatenate(([0], np.cumsum(partition)[:-1])).astype(int)
    logger.info(
        "Running %d simulations of %d cash flows over %d periods on %d worker(s) (seed=%d)",
        n_sims, len(templates), horizon, n_workers, seed,
    )
    logger.info("Draws per worker: %s", partition)

    inflow = np.empty(n_sims, dtype=float)
    outflow = np.empty(n_sims, dtype=float)
    period_sums: List[Optional[np.ndarray]] = [None] * n_workers

    tasks = [
        delayed(run_worker_block)(i, n, worker_seed(seed, i), templates)
        for i, n in enumerate(partition)
        if n > 0
    ]

    # the generator is consumed to exhaustion below, after which joblib
    # shuts the backend down; on error it aborts the pending tasks
    parallel = Parallel(
        n_jobs=min(n_workers, len(tasks)),
        backend=backend,
        return_as="generator_unordered",
    )
    collected = 0
    try:
        for result in parallel(tasks):
            collected += _store(result, partition, offsets, inflow, outflow, period_sums)
    except WorkerFailure:
        logger.error("Simulation aborted: a worker failed to set up its cash flows")
        raise
    except Exception as exc:
        logger.error("Simulation aborted: %s", exc)
        raise WorkerFailure(f"simulation aborted: {type(exc).__name__}: {exc}") from exc

    if collected != n_sims:
        raise WorkerFailure(f"collected {collected} draws, expected {n_sims}")

    # sum in worker order so the floating-point result is reproducible
    period_total = np.zeros(horizon, dtype=float)
    for sums in period_sums:
        if sums is not None:
            period_total += sums

    logger.info("Done: %d simulations collected", collected)
    return SimulationResults(
        net=inflow - outflow,
        inflow=inflow,
        outflow=outflow,
        mean_period_net=period_total / n_sims,
        start_period=templates[0].start_period,
        n_workers=n_workers,
        seed=seed,
    )


def _store(
    result: WorkerResult,
    partition: Sequence[int],
    offsets: np.ndarray,
    inflow: np.ndarray,
    outflow: np.ndarray,
    period_sums: List[Optional[np.ndarray]],
) -> int:
    i = result.worker_index
    if result.n_draws != partition[i]:
        raise WorkerFailure(
            f"worker {i} returned {result.n_draws} draws, expected {partition[i]}"
        )
    lo = int(offsets[i])
    hi = lo + result.n_draws
    inflow[lo:hi] = result.inflow
    outflow[lo:hi] = result.outflow
    period_sums[i] = result.period_net_sum
    logger.debug("Worker %d finished %d draws", i, result.n_draws)
    return result.n_draws


def net_cashflows(
    config: SimulationConfig,
    *,
    backend: str = "loky",
) -> SimulationResults:
    """Build templates from ``config`` and run the simulation it describes."""
    templates = build_templates(config)
    return run_simulation(
        templates,
        config.n_sims,
        config.n_workers,
        config.seed,
        backend=backend,
    )
