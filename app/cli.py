"""
Command-line interface for the Monte Carlo cash-flow simulator.

    cashflow-mc run tests/data/sample_config.json --workers 4 --seed 42 --discount-rate 0.01

Loads and validates the JSON configuration, runs the simulation and prints the
percentile summary and the decision report. Nothing is written to disk.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from joblib import cpu_count

# Make project root importable when run as a script
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from analytics.report import generate_cashflow_report
from core.errors import SimulationError
from core.utils import get_logger
from data_prep.loader import load_config
from data_prep.validators import validate_config
from engine.runner import net_cashflows

logger = get_logger("cashflow_mc.cli")


def run_cmd(args: argparse.Namespace) -> int:
    """Validate and run one configuration."""
    config = load_config(args.config, n_workers=args.workers, seed=args.seed)

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning(warning)
    if not validation.is_valid:
        print(validation.summary())
        return 1

    logger.info("=" * 70)
    logger.info("Running %s", config.name or Path(args.config).stem)
    logger.info("=" * 70)

    results = net_cashflows(config, backend=args.backend)
    report = generate_cashflow_report(
        results.net,
        results.inflow,
        results.outflow,
        results.mean_period_net,
        name=config.name or Path(args.config).stem,
        discount_rate=args.discount_rate,
    )

    with pd.option_context("display.float_format", "{:,.2f}".format, "display.width", 160):
        print(results.summary().to_string(index=False))
        print()
        print(report.to_dataframe().to_string(index=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cashflow-mc",
        description="Monte Carlo simulation of net cash flows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run a simulation from a JSON configuration")
    run_parser.add_argument("config", help="Path to the JSON configuration")
    run_parser.add_argument(
        "--workers", type=int, default=None,
        help="Parallel workers, -1 for all CPUs (default: configuration value, else 1)",
    )
    run_parser.add_argument("--seed", type=int, default=None, help="Base random seed")
    run_parser.add_argument(
        "--backend", choices=["loky", "threading"], default="loky",
        help="joblib backend for the worker pool",
    )
    run_parser.add_argument(
        "--discount-rate", type=float, default=None,
        help="Per-period discount rate for the NPV of the mean series",
    )
    run_parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    run_parser.set_defaults(func=run_cmd)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 2

    logging.getLogger().setLevel(args.log_level)
    if args.workers is not None and args.workers < 0:
        args.workers = cpu_count()

    try:
        return args.func(args)
    except (SimulationError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
