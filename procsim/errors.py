"""
Exception hierarchy of the simulator.

All errors are fatal for a run: nothing is retried and nothing is emitted for
the tick that raised.
"""
from __future__ import annotations
from typing import Optional


class SimulationError(Exception):
    """Base class of every error raised by procsim."""


class ConfigurationError(SimulationError, ValueError):
    """Unknown policy selector or invalid CPU count / RR time slice."""


class MalformedInputError(SimulationError, ValueError):
    """Arrival record with a wrong field count, bad value or out-of-order timestamp."""

    def __init__(self, message: str, lineno: Optional[int] = None):
        if lineno is not None:
            message = f"line {lineno}: {message}"
        super().__init__(message)
        self.lineno = lineno


class SchedulingInvariantError(SimulationError, RuntimeError):
    """Internal state corruption, e.g. an occupied CPU slot naming a process that is not live."""
