"""
Output side of a run: the per-tick text table and pandas views of the history.
"""
from __future__ import annotations
import sys
from typing import Optional, TextIO

import numpy as np
import pandas as pd

from .scheduler import SchedulerSim


def format_tick(t: int, cpus_state: np.ndarray) -> str:
    """`t cpu1_state cpu2_state ...`, -1 for a sleeping CPU."""
    return " ".join([str(int(t))] + [str(int(x)) for x in cpus_state])


class TextSink:
    """Writes one line per tick to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None, flush: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.flush = flush
        self.n_lines = 0

    def __call__(self, t: int, cpus_state: np.ndarray) -> None:
        self.stream.write(format_tick(t, cpus_state) + "\n")
        if self.flush:
            self.stream.flush()
        self.n_lines += 1


def history_frame(sim: SchedulerSim) -> pd.DataFrame:
    """Recorded CPU states as a DataFrame indexed by tick, one column per CPU."""
    cols = [f"cpu{i}" for i in range(sim.n_cpu)]
    if not sim.hist_cpus:
        return pd.DataFrame(columns=cols, index=pd.Index([], name="t"), dtype=np.int64)
    hist = np.vstack(sim.hist_cpus)
    return pd.DataFrame(hist, columns=cols, index=pd.Index(sim.hist_steps, name="t"))


def process_frame(sim: SchedulerSim) -> pd.DataFrame:
    """Per-process statistics of the finished processes, in completion order."""
    rows = [
        dict(
            pid=p.pid,
            priority=p.priority,
            exec_time=p.exec_time,
            arrival=p.arrival_time,
            start=p.start_time,
            finish=p.finish_time + 1,
        )
        for p in sim.finished
    ]
    df = pd.DataFrame(rows, columns=["pid", "priority", "exec_time", "arrival", "start", "finish"])
    df["turnaround"] = df["finish"] - df["arrival"]
    df["waiting"] = df["turnaround"] - df["exec_time"]
    df["response"] = df["start"] - df["arrival"]
    return df.set_index("pid")
