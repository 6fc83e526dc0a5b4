from __future__ import annotations
from operator import attrgetter
from typing import Callable, List

import numpy as np

from ..process import IDLE, Process

by_exec_time = attrgetter("exec_time")
by_remaining_time = attrgetter("remaining_time")
by_priority = attrgetter("priority")


def update_cpus_state(proc_list: List[Process], cpus_state: np.ndarray) -> np.ndarray:
    """
    Slot fill shared by every policy:
    - the first len(cpus_state) processes of proc_list get a CPU, the rest wait
    - occupied slots are then listed by ascending pid, sleeping CPUs last
    The canonical ordering only affects the output, proc_list is left untouched.
    """
    n = min(len(cpus_state), len(proc_list))
    busy = np.fromiter((p.pid for p in proc_list[:n]), dtype=cpus_state.dtype, count=n)
    cpus_state.fill(IDLE)
    cpus_state[:n] = np.sort(busy, kind="stable")
    return cpus_state


def stable_sort(proc_list: List[Process], key: Callable[[Process], int], start: int = 0) -> None:
    """Sort proc_list[start:] in place by key; equal keys keep their relative order."""
    tail = proc_list[start:]
    if len(tail) < 2: return
    keys = np.fromiter((key(p) for p in tail), dtype=np.int64, count=len(tail))
    order = np.argsort(keys, kind="stable")
    proc_list[start:] = [tail[i] for i in order]


def count_running(proc_list: List[Process], cpus_state: np.ndarray) -> int:
    """
    Number of ready processes that currently own a CPU.
    They always form the head of proc_list: the previous slot fill took them
    from the front and later arrivals are appended behind.
    """
    running = set(int(x) for x in cpus_state if x != IDLE)
    if not running: return 0
    return sum(1 for p in proc_list if p.pid in running)
