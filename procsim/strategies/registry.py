from __future__ import annotations
from enum import IntEnum
from functools import partial
from typing import Callable, Dict, List, Union

import numpy as np

from ..errors import ConfigurationError
from ..process import Process
from .strategy_FCFS import policy_FCFS
from .strategy_SJF import policy_SJF
from .strategy_SRTF import policy_SRTF
from .strategy_round_robin import policy_round_robin
from .strategy_priority import (
    policy_priority_FCFS,
    policy_priority_SRTF,
    policy_priority_FCFS_nonpreemptive,
)

PolicyFn = Callable[[List[Process], np.ndarray], np.ndarray]


class Policy(IntEnum):
    """Scheduling methods, numbered as on the command line."""
    FCFS = 0
    SJF = 1
    SRTF = 2
    RR = 3
    PRIO_FCFS = 4
    PRIO_SRTF = 5
    PRIO_FCFS_NP = 6


POLICIES: Dict[Policy, Callable[..., np.ndarray]] = {
    Policy.FCFS: policy_FCFS,
    Policy.SJF: policy_SJF,
    Policy.SRTF: policy_SRTF,
    Policy.RR: policy_round_robin,
    Policy.PRIO_FCFS: policy_priority_FCFS,
    Policy.PRIO_SRTF: policy_priority_SRTF,
    Policy.PRIO_FCFS_NP: policy_priority_FCFS_nonpreemptive,
}

ALIASES = {
    "first_come_first_serve": Policy.FCFS,
    "shortest_job_first": Policy.SJF,
    "shortest_remaining_time_first": Policy.SRTF,
    "round_robin": Policy.RR,
    "priority_fcfs": Policy.PRIO_FCFS,
    "priority_srtf": Policy.PRIO_SRTF,
    "priority_fcfs_np": Policy.PRIO_FCFS_NP,
    "priority_nonpreemptive": Policy.PRIO_FCFS_NP,
}


def resolve_policy(selector: Union[int, str, Policy]) -> Policy:
    """Map 3, "3", "RR" or "round_robin" to Policy.RR; anything unknown is a ConfigurationError."""
    if isinstance(selector, Policy):
        return selector
    if isinstance(selector, str):
        name = selector.strip()
        if name.lstrip("+-").isdigit():
            try:
                selector = int(name)
            except ValueError:
                raise ConfigurationError(f"invalid schedule method: {name!r}") from None
        else:
            key = name.upper().replace("-", "_")
            if key in Policy.__members__:
                return Policy[key]
            if key.lower() in ALIASES:
                return ALIASES[key.lower()]
            raise ConfigurationError(f"invalid schedule method: {name!r}")
    try:
        return Policy(int(selector))
    except (TypeError, ValueError):
        raise ConfigurationError(f"invalid schedule method: {selector!r}") from None


def get_policy(selector: Union[int, str, Policy], rr_time: int = 1) -> PolicyFn:
    """Single selection point: returns a callable (proc_list, cpus_state) -> cpus_state."""
    policy = resolve_policy(selector)
    if policy is Policy.RR:
        if int(rr_time) < 1:
            raise ConfigurationError(f"round robin slice time must be >= 1, got {rr_time}")
        return partial(policy_round_robin, rr_time=int(rr_time))
    return POLICIES[policy]
