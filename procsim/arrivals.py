"""
Arrival input: text reader and random workload generator.

Text format, one timestamp group per line:
    t id prio exec_t [id prio exec_t ...]
A line holding only `t` is a group without arrivals, a blank line ends the input.
"""
from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from .errors import MalformedInputError

ArrivalRecord = Tuple[int, int, int]  # (pid, priority, exec_time)
INT64_MIN, INT64_MAX = int(np.iinfo(np.int64).min), int(np.iinfo(np.int64).max)


class ArrivalBatch(NamedTuple):
    time: int
    records: Tuple[ArrivalRecord, ...]


def parse_line(line: str, lineno: Optional[int] = None) -> Optional[ArrivalBatch]:
    """Parse one input line; returns None for a blank line (end of input)."""
    tokens = line.split()
    if not tokens:
        return None
    try:
        values = [int(tok) for tok in tokens]
    except ValueError:
        raise MalformedInputError(f"non-integer field in {line.strip()!r}", lineno) from None

    if any(v < INT64_MIN or v > INT64_MAX for v in values):
        raise MalformedInputError(f"field out of the 64-bit integer range in {line.strip()!r}", lineno)

    t, fields = values[0], values[1:]
    if t < 0:
        raise MalformedInputError(f"negative timestamp {t}", lineno)
    if len(fields) % 3:
        raise MalformedInputError(
            f"expected `t` followed by (id, prio, exec_t) triples, got {len(tokens)} fields", lineno
        )

    records = []
    for i in range(0, len(fields), 3):
        pid, prio, exec_t = fields[i:i + 3]
        if pid < 0:
            raise MalformedInputError(f"process id must be non-negative, got {pid}", lineno)
        if exec_t <= 0:
            raise MalformedInputError(f"process {pid}: execution time must be positive, got {exec_t}", lineno)
        records.append((pid, prio, exec_t))
    return ArrivalBatch(t, tuple(records))


def read_arrivals(stream: Iterable[str]) -> Iterator[ArrivalBatch]:
    """
    Lazily turn input lines into arrival batches, one batch per line.
    - a batch is yielded as soon as its line is parsed, no look-ahead
    - a blank line (or EOF) ends the input, nothing after it is read
    - a timestamp not above the previous one is a MalformedInputError
    """
    last_time: Optional[int] = None
    for lineno, line in enumerate(stream, start=1):
        batch = parse_line(line, lineno)
        if batch is None:
            return
        if last_time is not None and batch.time <= last_time:
            raise MalformedInputError(
                f"timestamp {batch.time} after {last_time}, one line per tick in increasing order", lineno
            )
        last_time = batch.time
        yield batch


def load_arrivals(path: Union[str, Path]) -> List[ArrivalBatch]:
    """Read a whole arrival file into a list of batches."""
    with open(path, "r", encoding="utf-8") as f:
        return list(read_arrivals(f))


def format_arrivals(batches: Iterable[ArrivalBatch]) -> str:
    """Inverse of read_arrivals, including the terminating blank line."""
    lines = []
    for b in batches:
        fields = [str(b.time)] + [f"{pid} {prio} {exec_t}" for pid, prio, exec_t in b.records]
        lines.append(" ".join(fields))
    return "\n".join(lines) + "\n\n"


def generate_arrivals(
    N: int,
    arrival_rate: float = 0.5,
    mean_exec: float = 4.0,
    max_exec: int = 20,
    n_priorities: int = 4,
    rng: Optional[np.random.Generator] = None,
) -> List[ArrivalBatch]:
    """
    Generate N processes with unique ids 0..N-1.
    - inter-arrival gaps ~ Geometric(arrival_rate) - 1, so several processes may share a tick
    - exec_t ~ 1 + Poisson(mean_exec - 1), clipped to max_exec
    - priority ~ U{0, n_priorities - 1}
    One batch per tick from 0 to the last arrival, ticks without arrivals get an empty batch.
    """
    if N < 0:
        raise ValueError("N must be non-negative")
    if not 0.0 < arrival_rate <= 1.0:
        raise ValueError("arrival_rate must be in (0, 1]")
    if mean_exec < 1 or max_exec < 1 or n_priorities < 1:
        raise ValueError("mean_exec, max_exec and n_priorities must be >= 1")
    if rng is None:
        rng = np.random.default_rng()

    gaps = rng.geometric(arrival_rate, size=N) - 1
    gaps[:1] = 0  # first arrival at t=0
    times = np.cumsum(gaps)
    exec_t = np.minimum(1 + rng.poisson(mean_exec - 1.0, size=N), max_exec)
    prio = rng.integers(0, n_priorities, size=N)

    batches: List[ArrivalBatch] = []
    last = int(times[-1]) if N else -1
    for t in range(last + 1):
        idx = np.nonzero(times == t)[0]
        records = tuple((int(i), int(prio[i]), int(exec_t[i])) for i in idx)
        batches.append(ArrivalBatch(int(t), records))
    return batches
