"""
Strategy policy exports.
"""

from .strategy_FCFS import policy_FCFS
from .strategy_SJF import policy_SJF
from .strategy_SRTF import policy_SRTF
from .strategy_round_robin import policy_round_robin
from .strategy_priority import (
    policy_priority_FCFS,
    policy_priority_SRTF,
    policy_priority_FCFS_nonpreemptive,
)
from .registry import Policy, POLICIES, get_policy, resolve_policy

__all__ = [
    "policy_FCFS",
    "policy_SJF",
    "policy_SRTF",
    "policy_round_robin",
    "policy_priority_FCFS",
    "policy_priority_SRTF",
    "policy_priority_FCFS_nonpreemptive",
    "Policy",
    "POLICIES",
    "get_policy",
    "resolve_policy",
]
