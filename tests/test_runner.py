"""Tests for the parallel simulation runner."""

from dataclasses import dataclass

import numpy as np
import pytest

from core.config import SimulationConfig
from core.errors import ConfigurationError, ConstructionError, PartitionInvariantError, WorkerFailure
from core.schema import CashflowDescriptor
from distributions.base import Distribution
from distributions.variants import Fixed, Uniform
from engine.cashflow import build_template, build_templates
from engine.runner import (
    SEED_STRIDE,
    calc_sims_per_cpu,
    check_partition,
    net_cashflows,
    run_simulation,
    worker_seed,
)
from engine.worker import SimulationWorker


@dataclass(frozen=True)
class _Unbindable(Distribution):
    """Valid at construction, fails when a worker binds it."""
    level: float = 0.0

    def validate(self) -> None:
        pass

    def bind(self, rng):
        raise RuntimeError("no sampler available")


@pytest.mark.parametrize(
    "sims, cpus, expected",
    [
        (11, 3, [4, 4, 3]),
        (22, 4, [6, 6, 5, 5]),
        (10, 2, [5, 5]),
        (1, 1, [1]),
        (3, 5, [1, 1, 1, 0, 0]),
    ],
)
def test_calc_sims_per_cpu(sims, cpus, expected):
    assert calc_sims_per_cpu(sims, cpus) == expected


def test_partition_is_near_even_for_all_small_inputs():
    for sims in range(1, 60):
        for cpus in range(1, 12):
            partition = calc_sims_per_cpu(sims, cpus)
            assert len(partition) == cpus
            assert sum(partition) == sims
            assert max(partition) - min(partition) <= 1
            assert partition == sorted(partition, reverse=True)


@pytest.mark.parametrize("sims, cpus", [(0, 1), (5, 0), (-1, 2)])
def test_calc_sims_per_cpu_rejects_non_positive(sims, cpus):
    with pytest.raises(ValueError):
        calc_sims_per_cpu(sims, cpus)


def test_check_partition():
    check_partition([3, 2], 5)
    with pytest.raises(PartitionInvariantError):
        check_partition([3, 3], 5)
    with pytest.raises(PartitionInvariantError):
        check_partition([6, -1], 5)


def test_worker_seeds_are_distinct_and_deterministic():
    seeds = [worker_seed(7, i) for i in range(16)]
    assert len(set(seeds)) == 16
    assert seeds == [worker_seed(7, i) for i in range(16)]
    assert worker_seed(7, 0) == 7
    assert worker_seed(0, 1) == SEED_STRIDE
    assert all(0 <= s < 2 ** 64 for s in seeds)


@pytest.mark.parametrize("backend", ["loky", "threading"])
def test_fixed_scenario_end_to_end(fixed_config, backend):
    results = net_cashflows(fixed_config, backend=backend)
    assert results.n_draws == 10
    assert results.inflow.tolist() == [2000.0] * 10
    assert results.outflow.tolist() == [800.0] * 10
    assert results.net.tolist() == [1200.0] * 10
    assert results.mean_period_net == pytest.approx([300, 300, 300, 300])


def test_same_seed_is_bit_identical(random_config):
    a = net_cashflows(random_config, backend="threading")
    b = net_cashflows(random_config, backend="threading")
    np.testing.assert_array_equal(a.net, b.net)
    np.testing.assert_array_equal(a.inflow, b.inflow)
    np.testing.assert_array_equal(a.mean_period_net, b.mean_period_net)


def test_backend_does_not_change_results(random_config):
    a = net_cashflows(random_config, backend="threading")
    b = net_cashflows(random_config, backend="loky")
    np.testing.assert_array_equal(a.net, b.net)


def test_different_seeds_differ(random_config):
    templates = build_templates(random_config)
    a = run_simulation(templates, 25, 3, seed=1, backend="threading")
    b = run_simulation(templates, 25, 3, seed=2, backend="threading")
    assert not np.array_equal(a.net, b.net)


def test_output_blocks_follow_worker_order(random_config):
    templates = build_templates(random_config)
    results = run_simulation(templates, 25, 3, seed=42, backend="threading")
    # worker 1 owns draws 9..16 (partition [9, 8, 8])
    block = SimulationWorker(1, templates, worker_seed(42, 1)).run(8)
    np.testing.assert_array_equal(results.inflow[9:17], block.inflow)
    np.testing.assert_array_equal(results.outflow[9:17], block.outflow)


def test_draws_are_consistent(random_config):
    results = net_cashflows(random_config, backend="threading")
    np.testing.assert_allclose(results.net, results.inflow - results.outflow)
    assert (results.inflow > 0).all()
    assert results.mean_period_net.shape == (12,)
    assert results.mean_period_net.sum() == pytest.approx(results.net.mean())


def test_more_workers_than_sims():
    templates = [build_template(1, 2, CashflowDescriptor("A", False, "1-2", Uniform(0, 1)))]
    results = run_simulation(templates, 3, n_workers=8, seed=5, backend="threading")
    assert results.n_draws == 3
    assert results.n_workers == 8
    assert np.isfinite(results.net).all()


def test_worker_failure_aborts_run():
    templates = [
        build_template(1, 3, CashflowDescriptor("Good", False, "1-3", Fixed(1))),
        build_template(1, 3, CashflowDescriptor("Broken", True, "1-3", _Unbindable())),
    ]
    with pytest.raises(WorkerFailure, match="no sampler available"):
        run_simulation(templates, 4, n_workers=2, backend="threading")


def test_empty_templates_rejected():
    with pytest.raises(ConstructionError):
        run_simulation([], 10)


def test_mismatched_horizons_rejected():
    templates = [
        build_template(1, 3, CashflowDescriptor("A", False, "1", Fixed(1))),
        build_template(1, 4, CashflowDescriptor("B", False, "1", Fixed(1))),
    ]
    with pytest.raises(ConstructionError):
        run_simulation(templates, 10)


def test_results_frames(fixed_config):
    results = net_cashflows(fixed_config, backend="threading")
    frame = results.to_dataframe()
    assert list(frame.columns) == ["draw", "net", "inflow", "outflow"]
    assert len(frame) == 10
    periods = results.period_frame()
    assert periods["period"].tolist() == [1, 2, 3, 4]
    summary = results.summary()
    assert summary["Metric"].tolist() == ["Net Cash Flow", "Total Inflow", "Total Outflow"]
    assert summary.loc[0, "P50"] == pytest.approx(1200)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start_period": 5, "end_period": 4, "n_sims": 1},
        {"start_period": 1, "end_period": 4, "n_sims": 0},
        {"start_period": 1, "end_period": 4, "n_sims": 1, "n_workers": 0},
        {"start_period": 1, "end_period": 4, "n_sims": 1, "seed": -1},
    ],
)
def test_invalid_simulation_config(kwargs):
    with pytest.raises(ConfigurationError):
        SimulationConfig(**kwargs)


def test_negative_start_period_rejected():
    with pytest.raises(ConfigurationError, match="non-negative"):
        SimulationConfig(start_period=-1, end_period=4, n_sims=1)
