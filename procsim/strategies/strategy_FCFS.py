from .base import update_cpus_state


def policy_FCFS(proc_list, cpus_state):
    """FCFS: the ready list is already in arrival order."""
    return update_cpus_state(proc_list, cpus_state)
