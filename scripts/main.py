"""
Process scheduler simulator, step mode.

Reads arrivals from stdin (`t id prio exec_t [id prio exec_t ...]` per line, blank line ends the
input), runs the chosen schedule method and prints one line per tick:
    t cpu1_state cpu2_state ...
with the id of the executing process, or -1 for a sleeping CPU.

Schedule methods:
    0 FCFS          First Come First Serve
    1 SJF           Shortest Job First
    2 SRTF          Shortest Remaining Time First
    3 RR            Round Robin
    4 PRIO_FCFS     Priority with preemption, same priorities FCFS
    5 PRIO_SRTF     Priority with preemption, same priorities SRTF
    6 PRIO_FCFS_NP  Priority without preemption, same priorities FCFS
Lower priority number means higher executing priority.

Example:
    printf '0 1 0 3 2 0 2\\n\\n' | python scripts/main.py RR 1 2
"""
from __future__ import annotations

import sys
import argparse
import logging
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from procsim import SchedulerSim, SimulationError, read_arrivals
from procsim.output import TextSink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Discrete-time CPU scheduling simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("method", help="schedule method, number 0-6 or name (FCFS, SJF, SRTF, RR, ...)")
    parser.add_argument("cpu_count", nargs="?", type=int, default=1, help="number of CPUs (default 1)")
    parser.add_argument("rr_time", nargs="?", type=int, default=1, help="round robin slice time (default 1)")
    parser.add_argument("--input", type=Path, default=None, help="read arrivals from a file instead of stdin")
    parser.add_argument("--stats", action="store_true", help="print run metrics to stderr")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.input is not None:
            with open(args.input, "r", encoding="utf-8") as f:
                metrics = simulate(f, args)
        else:
            metrics = simulate(sys.stdin, args)
    except SimulationError as e:
        logging.getLogger("scheduler").error(str(e))
        return 2

    if args.stats:
        for k, v in metrics.items():
            print(f"{k:>16s}: {v:.4f}" if isinstance(v, float) else f"{k:>16s}: {v}", file=sys.stderr)
    return 0


def simulate(stream, args):
    sim = SchedulerSim(
        read_arrivals(stream),
        policy=args.method,
        n_cpu=args.cpu_count,
        rr_time=args.rr_time,
        sink=TextSink(sys.stdout),
        record_history=False,
    )
    return sim.run()


if __name__ == "__main__":
    sys.exit(main())
