from __future__ import annotations
from typing import Optional

IDLE = -1  # CPU slot value of a sleeping CPU


class Process:
    """
    One unit of work in the ready list.
    - exec_time is fixed at creation, remaining_time counts down once per executed tick
    - the process leaves the ready list the tick remaining_time hits 0
    """

    __slots__ = (
        "pid", "priority", "exec_time", "remaining_time",
        "arrival_time", "start_time", "finish_time",
    )

    def __init__(self, pid: int, priority: int, exec_time: int, arrival_time: int = 0):
        self.pid = int(pid)
        self.priority = int(priority)
        self.exec_time = int(exec_time)
        self.remaining_time = self.exec_time
        self.arrival_time = int(arrival_time)
        self.start_time: Optional[int] = None   # first executed tick
        self.finish_time: Optional[int] = None  # tick in which the last unit ran

    @property
    def executed_time(self) -> int:
        return self.exec_time - self.remaining_time

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0

    def __repr__(self) -> str:
        return (f"Process(pid={self.pid}, priority={self.priority}, "
                f"exec_time={self.exec_time}, remaining_time={self.remaining_time})")
