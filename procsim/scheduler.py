from __future__ import annotations
import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

import numpy as np

from .arrivals import ArrivalBatch
from .errors import ConfigurationError, MalformedInputError, SchedulingInvariantError
from .process import IDLE, Process
from .strategies import Policy, get_policy, resolve_policy

Sink = Callable[[int, np.ndarray], None]


class SchedulerSim:
    """
    Discrete-time CPU scheduling simulator:
    - one arrival batch is pulled per tick until the input ends, stamped with that tick
    - policy_fn reorders the ready list and fills the CPU slots
    - every tick each busy CPU runs its process for one time unit
    - the run ends once the input is exhausted and no process is left
    """

    def __init__(
        self,
        arrivals: Iterable[ArrivalBatch],
        policy: Union[int, str, Policy],
        n_cpu: int = 1,
        rr_time: int = 1,
        sink: Optional[Sink] = None,
        record_history: bool = True,
    ):
        # Basic configuration
        if int(n_cpu) < 1:
            raise ConfigurationError(f"CPU count must be >= 1, got {n_cpu}")
        self.n_cpu = int(n_cpu)
        self.rr_time = int(rr_time)
        self.policy = resolve_policy(policy)
        self.policy_fn = get_policy(self.policy, self.rr_time)
        self.sink = sink
        self.record_hist = record_history

        # Input
        self._arrivals: Iterator[ArrivalBatch] = iter(arrivals)
        self._pending: Optional[ArrivalBatch] = None
        self.input_exhausted = False

        # Process state
        self.proc_list: List[Process] = []      # ready list, policy order
        self.finished: List[Process] = []       # completion order
        self.n_admitted = 0

        # CPU state
        self.cpus_state = np.full(self.n_cpu, IDLE, dtype=np.int64)
        self._last_running: set = set()

        # Time step
        self.clock = 0
        self.busy_slot_ticks = 0
        self.n_preemptions = 0

        # History (filled only when record_hist=True)
        self.hist_cpus: List[np.ndarray] = []
        self.hist_steps: List[int] = []

    # ================== Internal helpers ================== #
    def _fetch_batch(self):
        """Pull the next arrival batch unless one is already waiting."""
        if self._pending is not None or self.input_exhausted:
            return
        try:
            self._pending = next(self._arrivals)
        except StopIteration:
            self.input_exhausted = True
            logging.getLogger("scheduler").debug(f"t={self.clock}: input exhausted")

    def _admit(self):
        """Append the processes of the batch read for this tick, in input order."""
        batch = self._pending
        if batch is None:
            return
        if batch.time != self.clock:
            raise MalformedInputError(f"arrival batch for t={batch.time} received at t={self.clock}")
        self._pending = None
        for pid, prio, exec_t in batch.records:
            self.proc_list.append(Process(pid, prio, exec_t, arrival_time=self.clock))
        self.n_admitted += len(batch.records)
        if batch.records:
            logging.getLogger("scheduler").debug(f"t={self.clock}: admitted {[r[0] for r in batch.records]}")

    def _find(self, pid: int) -> int:
        for i, p in enumerate(self.proc_list):
            if p.pid == pid:
                return i
        raise SchedulingInvariantError(f"t={self.clock}: CPU runs process {pid} which is not in the ready list")

    def _execute(self) -> List[int]:
        """Run every busy CPU for one tick; returns the pids that completed."""
        completed = []
        for pid in self.cpus_state.tolist():
            if pid == IDLE: continue
            idx = self._find(pid)
            proc = self.proc_list[idx]
            if proc.start_time is None:
                proc.start_time = self.clock
            proc.remaining_time -= 1
            self.busy_slot_ticks += 1
            if proc.remaining_time == 0:
                proc.finish_time = self.clock
                del self.proc_list[idx]
                self.finished.append(proc)
                completed.append(pid)
        if completed:
            logging.getLogger("scheduler").debug(f"t={self.clock}: completed {completed}")
        return completed

    def _count_preemptions(self):
        running = set(int(x) for x in self.cpus_state if x != IDLE)
        live = {p.pid for p in self.proc_list}
        self.n_preemptions += len((self._last_running & live) - running)
        self._last_running = running

    def _all_cpus_sleeping(self) -> bool:
        return bool((self.cpus_state == IDLE).all())

    @property
    def done(self) -> bool:
        return self.input_exhausted and self._pending is None and not self.proc_list and self._all_cpus_sleeping()

    # ================== Main loop ================== #
    def step(self) -> Optional[np.ndarray]:
        """
        Simulate one tick. Returns the emitted CPU state, or None once the run is done
        (in which case nothing is emitted).
        """
        self._fetch_batch()
        if self.done:
            return None
        self._admit()

        self.cpus_state = self.policy_fn(self.proc_list, self.cpus_state)
        self._count_preemptions()
        completed = self._execute()

        t = self.clock
        emitted = self.cpus_state.copy()
        if self.sink is not None:
            self.sink(t, emitted)
        if self.record_hist:
            self.hist_cpus.append(emitted)
            self.hist_steps.append(t)

        # completed processes free their CPU for the next decision
        if completed:
            self.cpus_state[np.isin(self.cpus_state, completed)] = IDLE
        self.clock += 1
        return emitted

    def run(self, verbose: bool = False) -> Dict[str, float]:
        """
        Run until done and return metrics:
        n_ticks, n_processes, makespan, avg_turnaround, avg_waiting, avg_response,
        cpu_utilization, n_preemptions, throughput
        """
        while self.step() is not None:
            if verbose and self.clock % 100 == 0:
                print(f"tick {self.clock:>6d}, ready={len(self.proc_list)}, finished={len(self.finished)}")

        metrics = self.metrics()
        logging.getLogger("scheduler").info(
            f"{self.policy.name}: {metrics['n_processes']} processes on {self.n_cpu} CPU(s) "
            f"in {metrics['n_ticks']} ticks"
        )
        return metrics

    def metrics(self) -> Dict[str, float]:
        n_ticks = int(self.clock)
        done = self.finished
        if done:
            arrival = np.array([p.arrival_time for p in done], dtype=np.float64)
            start = np.array([p.start_time for p in done], dtype=np.float64)
            finish = np.array([p.finish_time for p in done], dtype=np.float64) + 1  # end of last tick
            exec_t = np.array([p.exec_time for p in done], dtype=np.float64)
            turnaround = finish - arrival
            makespan = float(finish.max())
            avg_turnaround = float(turnaround.mean())
            avg_waiting = float((turnaround - exec_t).mean())
            avg_response = float((start - arrival).mean())
        else:
            makespan = avg_turnaround = avg_waiting = avg_response = 0.0

        capacity = float(self.n_cpu * n_ticks)
        return dict(
            n_ticks=n_ticks,
            n_processes=len(done),
            makespan=makespan,
            avg_turnaround=avg_turnaround,
            avg_waiting=avg_waiting,
            avg_response=avg_response,
            cpu_utilization=(self.busy_slot_ticks / capacity) if capacity else 0.0,
            n_preemptions=int(self.n_preemptions),
            throughput=(len(done) / n_ticks) if n_ticks else 0.0,
        )
