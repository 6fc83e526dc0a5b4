"""
Priority strategies (lower priority number runs first).
Ties fall back on FCFS (arrival order) or SRTF (remaining time).
"""
import logging

from .base import by_priority, by_remaining_time, count_running, stable_sort, update_cpus_state


def policy_priority_FCFS(proc_list, cpus_state):
    """Preemptive priority, FCFS among equal priorities."""
    stable_sort(proc_list, by_priority)
    return update_cpus_state(proc_list, cpus_state)


def policy_priority_SRTF(proc_list, cpus_state):
    """Preemptive priority, SRTF among equal priorities."""
    # second pass dominates: priority first, remaining time breaks ties
    stable_sort(proc_list, by_remaining_time)
    stable_sort(proc_list, by_priority)
    return update_cpus_state(proc_list, cpus_state)


def policy_priority_FCFS_nonpreemptive(proc_list, cpus_state):
    """Non-preemptive priority: running processes keep their CPU until they finish."""
    skip = count_running(proc_list, cpus_state)
    if skip:
        logging.getLogger("strategy").debug(f"PRIO_FCFS_NP: keeping {skip} running process(es) in place")
    stable_sort(proc_list, by_priority, start=skip)
    return update_cpus_state(proc_list, cpus_state)
