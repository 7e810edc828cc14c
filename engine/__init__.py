"""
Monte Carlo cash-flow engine — period masks, templates/instances, workers and runner.
"""

from .periods import parse_periods, describe_periods
from .cashflow import CashflowTemplate, CashflowInstance, build_template, build_templates
from .worker import SimulationWorker, WorkerResult
from .results import SimulationResults
from .runner import calc_sims_per_cpu, worker_seed, run_simulation, net_cashflows

__all__ = [
    "parse_periods",
    "describe_periods",
    "CashflowTemplate",
    "CashflowInstance",
    "build_template",
    "build_templates",
    "SimulationWorker",
    "WorkerResult",
    "SimulationResults",
    "calc_sims_per_cpu",
    "worker_seed",
    "run_simulation",
    "net_cashflows",
]
