"""Shared fixtures for the test suite."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import SimulationConfig
from core.schema import CashflowDescriptor, GrowthDescriptor
from distributions.variants import Fixed, PERT, Triangle

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def sample_config_path():
    return DATA_DIR / "sample_config.json"


@pytest.fixture
def fixed_config():
    """Inflow of 500 and outflow of 200 in periods 1-4, no randomness."""
    return SimulationConfig(
        start_period=1,
        end_period=4,
        n_sims=10,
        n_workers=2,
        cashflows=(
            CashflowDescriptor("Rent", False, "1-4", Fixed(500)),
            CashflowDescriptor("Upkeep", True, "1-4", Fixed(200)),
        ),
    )


@pytest.fixture
def random_config():
    """A small scenario with random values and growth."""
    return SimulationConfig(
        start_period=1,
        end_period=12,
        n_sims=25,
        n_workers=3,
        seed=42,
        cashflows=(
            CashflowDescriptor(
                "Revenues", False, "1-12", Triangle(50, 100, 70),
                growth=GrowthDescriptor("4,8", Triangle(-0.15, 0.35, 0.15)),
            ),
            CashflowDescriptor("Expenses", True, "1-12", PERT(30, 65, 42)),
            CashflowDescriptor("Overhead", True, "7-12", Fixed(5)),
        ),
    )
