"""
Core package — descriptors, configuration, errors, and shared utilities.
No business logic lives here.
"""

from .errors import (
    SimulationError,
    ConstructionError,
    ConfigurationError,
    PeriodSpecError,
    PeriodSyntaxError,
    PeriodOutOfRangeError,
    PeriodSequenceError,
    PartitionInvariantError,
    WorkerFailure,
)
from .schema import RESULT_COLUMNS, CashflowDescriptor, GrowthDescriptor
from .config import SimulationConfig
from .utils import get_logger, require_columns, horizon_length

__all__ = [
    "RESULT_COLUMNS",
    "CashflowDescriptor",
    "GrowthDescriptor",
    "SimulationConfig",
    "SimulationError",
    "ConstructionError",
    "ConfigurationError",
    "PeriodSpecError",
    "PeriodSyntaxError",
    "PeriodOutOfRangeError",
    "PeriodSequenceError",
    "PartitionInvariantError",
    "WorkerFailure",
    "get_logger",
    "require_columns",
    "horizon_length",
]
