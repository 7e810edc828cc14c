"""
Exception hierarchy for the cash-flow simulation engine.

Everything raised deliberately by this package derives from SimulationError,
so callers can catch the whole family at the boundary. The concrete classes
also derive from the closest builtin (ValueError / RuntimeError) so code that
only knows about builtins keeps working.
"""

from __future__ import annotations

from typing import Optional


class SimulationError(Exception):
    """Base class for all engine errors."""


class ConstructionError(SimulationError, ValueError):
    """Invalid distribution parameters or inconsistent templates."""


class ConfigurationError(SimulationError, ValueError):
    """Invalid run settings or an undecodable configuration document."""


class PeriodSpecError(SimulationError, ValueError):
    """
    Malformed or out-of-range period specification.

    ``line_item`` names the cash flow whose spec failed, once known.
    """

    def __init__(self, message: str, *, line_item: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line_item = line_item

    def __str__(self) -> str:
        if self.line_item:
            return f"{self.line_item}: {self.message}"
        return self.message

    def with_line_item(self, name: str) -> "PeriodSpecError":
        """Return a copy of this error tagged with the offending line item."""
        return type(self)(self.message, line_item=name)


class PeriodSyntaxError(PeriodSpecError):
    """A token in a period spec is not an integer or an ``a-b`` range."""


class PeriodOutOfRangeError(PeriodSpecError):
    """A period lies outside the simulation horizon."""


class PeriodSequenceError(SimulationError, RuntimeError):
    """Per-period values were requested out of order within a draw."""


class PartitionInvariantError(SimulationError, RuntimeError):
    """The per-worker partition does not add up to the requested draws."""


class WorkerFailure(SimulationError, RuntimeError):
    """A worker could not complete its block; the whole run is aborted."""
