import logging

from .base import by_exec_time, count_running, stable_sort, update_cpus_state


def policy_SJF(proc_list, cpus_state):
    """
    Shortest Job First (non-preemptive).
    Running processes stay at the head of the list untouched; only the waiting
    tail is sorted by total execution time.
    """
    skip = count_running(proc_list, cpus_state)
    if skip:
        logging.getLogger("strategy").debug(f"SJF: keeping {skip} running process(es) in place")
    stable_sort(proc_list, by_exec_time, start=skip)
    return update_cpus_state(proc_list, cpus_state)
