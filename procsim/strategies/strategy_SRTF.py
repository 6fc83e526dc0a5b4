from .base import by_remaining_time, stable_sort, update_cpus_state


def policy_SRTF(proc_list, cpus_state):
    """Shortest Remaining Time First: full re-sort every tick, so running processes may be preempted."""
    stable_sort(proc_list, by_remaining_time)
    return update_cpus_state(proc_list, cpus_state)
