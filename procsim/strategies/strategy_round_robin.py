import logging

from ..errors import SchedulingInvariantError
from ..process import IDLE
from .base import update_cpus_state


def policy_round_robin(proc_list, cpus_state, rr_time: int = 1):
    """
    Round Robin strategy: a running process whose executed time reached a
    multiple of rr_time is moved to the back of the ready list.
    CPUs are visited in slot order; waiting processes are never moved.
    """
    for pid in cpus_state.tolist():
        if pid == IDLE: continue
        idx = next((i for i, p in enumerate(proc_list) if p.pid == pid), None)
        if idx is None:
            raise SchedulingInvariantError(f"RR: process {pid} holds a CPU but is not in the ready list")
        proc = proc_list[idx]
        executed = proc.executed_time
        if executed > 0 and executed % rr_time == 0:
            proc_list.append(proc_list.pop(idx))
            logging.getLogger("strategy").debug(f"RR: slice over for process {pid} after {executed} tick(s)")
    return update_cpus_state(proc_list, cpus_state)
