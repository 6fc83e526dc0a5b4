"""
Core simulation library for process arrivals, CPU scheduling, and policies.
"""

from .arrivals import ArrivalBatch, generate_arrivals, load_arrivals, read_arrivals
from .errors import ConfigurationError, MalformedInputError, SchedulingInvariantError, SimulationError
from .process import IDLE, Process
from .scheduler import SchedulerSim
from .strategies import Policy, get_policy
from . import strategies

__all__ = [
    "ArrivalBatch",
    "generate_arrivals",
    "load_arrivals",
    "read_arrivals",
    "ConfigurationError",
    "MalformedInputError",
    "SchedulingInvariantError",
    "SimulationError",
    "IDLE",
    "Process",
    "SchedulerSim",
    "Policy",
    "get_policy",
    "strategies",
]
