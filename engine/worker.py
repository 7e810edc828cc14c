"""
Simulation worker — runs one contiguous block of independent draws.

A worker owns one numpy Generator and one CashflowInstance per template, all
bound to that generator. Nothing mutable is shared with other workers; the
templates it receives are read-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from core.errors import WorkerFailure

from .cashflow import CashflowTemplate, bind_instances


@dataclass
class WorkerResult:
    """Output of one worker block."""
    worker_index: int
    inflow: np.ndarray      # shape (n_draws,)
    outflow: np.ndarray     # shape (n_draws,)
    period_net_sum: np.ndarray  # shape (horizon,), net per period summed over draws

    @property
    def n_draws(self) -> int:
        return len(self.inflow)


class SimulationWorker:
    def __init__(self, worker_index: int, templates: Sequence[CashflowTemplate], seed: int):
        self.worker_index = worker_index
        self.seed = seed
        self.horizon = templates[0].horizon if templates else 0
        self.rng = np.random.default_rng(seed)
        try:
            self.instances = bind_instances(templates, self.rng)
        except Exception as exc:
            raise WorkerFailure(
                f"worker {worker_index} could not bind its cash flows: "
                f"{type(exc).__name__}: {exc}"
            ) from exc

    def run(self, n_draws: int) -> WorkerResult:
        inflow = np.zeros(n_draws, dtype=float)
        outflow = np.zeros(n_draws, dtype=float)
        period_net_sum = np.zeros(self.horizon, dtype=float)
        instances = self.instances

        for draw in range(n_draws):
            for cf in instances:
                cf.reset_for_new_draw()

            draw_in = 0.0
            draw_out = 0.0
            for period in range(self.horizon):
                period_in = 0.0
                period_out = 0.0
                for cf in instances:
                    val = cf.value(period)
                    if cf.is_outflow:
                        period_out += val
                    else:
                        period_in += val
                draw_in += period_in
                draw_out += period_out
                period_net_sum[period] += period_in - period_out

            inflow[draw] = draw_in
            outflow[draw] = draw_out

        return WorkerResult(
            worker_index=self.worker_index,
            inflow=inflow,
            outflow=outflow,
            period_net_sum=period_net_sum,
        )


def run_worker_block(
    worker_index: int,
    n_draws: int,
    seed: int,
    templates: Sequence[CashflowTemplate],
) -> WorkerResult:
    """Module-level entry point so process pools can pickle the task."""
    return SimulationWorker(worker_index, templates, seed).run(n_draws)
