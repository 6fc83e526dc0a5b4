import numpy as np
import pytest

from procsim import IDLE, Process
from procsim.errors import ConfigurationError, SchedulingInvariantError
from procsim.strategies import (
    Policy,
    get_policy,
    policy_FCFS,
    policy_SJF,
    policy_SRTF,
    policy_priority_FCFS,
    policy_priority_FCFS_nonpreemptive,
    policy_priority_SRTF,
    policy_round_robin,
    resolve_policy,
)
from procsim.strategies.base import count_running, stable_sort, update_cpus_state


def _proc(pid, priority=0, exec_time=1, remaining=None):
    p = Process(pid, priority, exec_time)
    if remaining is not None:
        p.remaining_time = remaining
    return p


def _cpus(*values, n=None):
    if n is not None:
        return np.full(n, IDLE, dtype=np.int64)
    return np.array(values, dtype=np.int64)


def _pids(proc_list):
    return [p.pid for p in proc_list]


# ------------------- slot fill -------------------
def test_slot_fill_takes_head_of_list_and_sorts_slots():
    procs = [_proc(5), _proc(3), _proc(9)]
    cpus = update_cpus_state(procs, _cpus(n=2))
    assert cpus.tolist() == [3, 5]
    assert _pids(procs) == [5, 3, 9]


def test_slot_fill_more_cpus_than_processes():
    cpus = update_cpus_state([_proc(4)], _cpus(n=3))
    assert cpus.tolist() == [4, IDLE, IDLE]


def test_slot_fill_empty_list_sleeps_every_cpu():
    cpus = update_cpus_state([], _cpus(7, 8))
    assert cpus.tolist() == [IDLE, IDLE]


def test_stable_sort_keeps_equal_keys_in_order():
    procs = [_proc(1, exec_time=3), _proc(2, exec_time=1), _proc(3, exec_time=3), _proc(4, exec_time=1)]
    stable_sort(procs, lambda p: p.exec_time)
    assert _pids(procs) == [2, 4, 1, 3]


def test_stable_sort_from_offset():
    procs = [_proc(1, exec_time=9), _proc(2, exec_time=5), _proc(3, exec_time=1)]
    stable_sort(procs, lambda p: p.exec_time, start=1)
    assert _pids(procs) == [1, 3, 2]


def test_count_running_ignores_finished_and_idle():
    procs = [_proc(1), _proc(2), _proc(3)]
    assert count_running(procs, _cpus(1, 2)) == 2
    assert count_running(procs, _cpus(1, 7)) == 1
    assert count_running(procs, _cpus(n=2)) == 0


# ------------------- policies -------------------
def test_fcfs_keeps_arrival_order():
    procs = [_proc(2, exec_time=9), _proc(1, exec_time=1)]
    assert policy_FCFS(procs, _cpus(n=1)).tolist() == [2]
    assert _pids(procs) == [2, 1]


def test_sjf_sorts_waiting_processes_by_exec_time():
    procs = [_proc(1, exec_time=5), _proc(2, exec_time=2), _proc(3, exec_time=2)]
    assert policy_SJF(procs, _cpus(n=1)).tolist() == [2]
    assert _pids(procs) == [2, 3, 1]


def test_sjf_does_not_preempt_running_process():
    procs = [_proc(1, exec_time=5, remaining=4), _proc(2, exec_time=1)]
    assert policy_SJF(procs, _cpus(1)).tolist() == [1]
    assert _pids(procs) == [1, 2]


def test_srtf_sorts_whole_list_by_remaining_time():
    procs = [_proc(1, exec_time=5, remaining=4), _proc(2, exec_time=1)]
    assert policy_SRTF(procs, _cpus(1)).tolist() == [2]
    assert _pids(procs) == [2, 1]


def test_srtf_equal_remaining_time_is_stable():
    procs = [_proc(3, exec_time=2), _proc(1, exec_time=2), _proc(2, exec_time=2)]
    policy_SRTF(procs, _cpus(n=2))
    assert _pids(procs) == [3, 1, 2]


def test_round_robin_rotates_after_full_slice():
    procs = [_proc(1, exec_time=3, remaining=1), _proc(2, exec_time=2)]
    assert policy_round_robin(procs, _cpus(1), rr_time=2).tolist() == [2]
    assert _pids(procs) == [2, 1]


def test_round_robin_keeps_process_inside_slice():
    procs = [_proc(1, exec_time=3, remaining=2), _proc(2, exec_time=2)]
    assert policy_round_robin(procs, _cpus(1), rr_time=2).tolist() == [1]
    assert _pids(procs) == [1, 2]


def test_round_robin_never_moves_waiting_process():
    procs = [_proc(1, exec_time=3, remaining=2), _proc(2, exec_time=4, remaining=2)]
    policy_round_robin(procs, _cpus(1), rr_time=2)
    assert _pids(procs) == [1, 2]


def test_round_robin_rotates_expired_processes_in_slot_order():
    procs = [
        _proc(1, exec_time=4, remaining=2),
        _proc(2, exec_time=4, remaining=2),
        _proc(3, exec_time=1),
    ]
    assert policy_round_robin(procs, _cpus(1, 2), rr_time=2).tolist() == [1, 3]
    assert _pids(procs) == [3, 1, 2]


def test_round_robin_missing_running_process_is_fatal():
    with pytest.raises(SchedulingInvariantError):
        policy_round_robin([_proc(1)], _cpus(42))


def test_priority_fcfs_ties_keep_arrival_order():
    procs = [_proc(1, priority=2), _proc(2, priority=1), _proc(3, priority=1)]
    assert policy_priority_FCFS(procs, _cpus(n=1)).tolist() == [2]
    assert _pids(procs) == [2, 3, 1]


def test_priority_srtf_priority_dominates_remaining_time():
    procs = [
        _proc(1, priority=1, exec_time=5),
        _proc(2, priority=0, exec_time=3),
        _proc(3, priority=1, exec_time=2),
        _proc(4, priority=0, exec_time=1),
    ]
    assert policy_priority_SRTF(procs, _cpus(n=2)).tolist() == [2, 4]
    assert _pids(procs) == [4, 2, 3, 1]


def test_priority_nonpreemptive_sorts_only_waiting_tail():
    procs = [_proc(1, priority=5, exec_time=3, remaining=2), _proc(2, priority=3), _proc(3, priority=0)]
    assert policy_priority_FCFS_nonpreemptive(procs, _cpus(1, IDLE)).tolist() == [1, 3]
    assert _pids(procs) == [1, 3, 2]


@pytest.mark.parametrize("policy", list(Policy))
def test_every_policy_handles_empty_ready_list(policy):
    assert get_policy(policy)([], _cpus(n=3)).tolist() == [IDLE] * 3


# ------------------- registry -------------------
@pytest.mark.parametrize("selector", [3, "3", "RR", "rr", "round_robin", Policy.RR])
def test_resolve_policy_accepts_numbers_and_names(selector):
    assert resolve_policy(selector) is Policy.RR


def test_resolve_policy_long_names():
    assert resolve_policy("prio-fcfs-np") is Policy.PRIO_FCFS_NP
    assert resolve_policy("shortest_job_first") is Policy.SJF


@pytest.mark.parametrize("selector", [7, -1, "9", "+-3", "\u00b2", "bogus", "", None])
def test_unknown_policy_is_configuration_error(selector):
    with pytest.raises(ConfigurationError):
        get_policy(selector)


def test_round_robin_slice_must_be_positive():
    with pytest.raises(ConfigurationError):
        get_policy(Policy.RR, rr_time=0)


def test_get_policy_binds_round_robin_slice():
    fn = get_policy("RR", rr_time=2)
    procs = [_proc(1, exec_time=3, remaining=2), _proc(2, exec_time=2)]
    assert fn(procs, _cpus(1)).tolist() == [1]
