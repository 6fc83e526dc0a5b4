from __future__ import annotations

import sys
import argparse
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from tqdm import tqdm

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from procsim import Policy, SchedulerSim, generate_arrivals
from procsim.output import history_frame


# ------------------- Single run: returns sim and metrics -------------------
def run_sim_and_metrics(
    policy: Policy,
    N: int,
    seed: int,
    n_cpu: int = 2,
    rr_time: int = 2,
    arrival_rate: float = 0.5,
    mean_exec: float = 4.0,
) -> Tuple[SchedulerSim, Dict[str, float]]:
    rng = np.random.default_rng(seed)
    arrivals = generate_arrivals(N, arrival_rate=arrival_rate, mean_exec=mean_exec, rng=rng)
    sim = SchedulerSim(arrivals, policy=policy, n_cpu=n_cpu, rr_time=rr_time, record_history=True)
    metrics = sim.run(verbose=False)
    return sim, metrics


def run_metrics_only(*args, **kwargs) -> Dict[str, float]:
    return run_sim_and_metrics(*args, **kwargs)[1]


# ------------------- Plotting -------------------
def plot_occupancy(sims: Dict[str, SchedulerSim], max_ticks: int = 200, out_path: Optional[Path] = None):
    """One row of CPU lanes per policy, each cell colored by the process it runs (white = idle)."""
    fig, axes = plt.subplots(len(sims), 1, figsize=(13, 1.2 + 1.1 * len(sims)), sharex=True, squeeze=False)
    for ax, (name, sim) in zip(axes[:, 0], sims.items()):
        hist = history_frame(sim).to_numpy()[:max_ticks].T  # (n_cpu, ticks)
        n_ids = int(hist.max()) + 1 if hist.size and hist.max() >= 0 else 1
        colors = plt.cm.viridis(np.linspace(0.1, 0.95, n_ids))
        cmap = ListedColormap(np.vstack([[1.0, 1.0, 1.0, 1.0], colors]))
        ax.imshow(hist + 1, aspect="auto", interpolation="nearest", cmap=cmap, vmin=0, vmax=n_ids)
        ax.set_yticks(range(sim.n_cpu))
        ax.set_yticklabels([f"CPU {i}" for i in range(sim.n_cpu)], fontsize=10)
        ax.set_ylabel(name, rotation=0, ha="right", va="center", fontsize=12, fontweight="semibold", color="#1f1f2e")
        for spine in ["top", "right"]:
            ax.spines[spine].set_visible(False)
    axes[-1, 0].set_xlabel("Tick", fontsize=14, fontweight="semibold", color="#1f1f2e")
    fig.patch.set_facecolor("#eef1f7")
    fig.tight_layout()
    if out_path is None:
        out_dir = ROOT / "results" / "figures"
        out_dir.mkdir(parents=True, exist_ok=True)
        out_path = out_dir / "occupancy.jpg"
    fig.savefig(out_path, dpi=300, format="jpg")
    plt.close(fig)
    return out_path


def summarize(metrics_list: List[Dict[str, float]]) -> pd.DataFrame:
    df = pd.DataFrame(metrics_list)
    return pd.DataFrame({"mean": df.mean(), "std": df.std(ddof=0)})


def main():
    parser = argparse.ArgumentParser(description="Compare scheduling policies on random workloads")
    parser.add_argument("--n-procs", type=int, default=200, help="processes per workload")
    parser.add_argument("--cpus", type=int, default=2)
    parser.add_argument("--rr-time", type=int, default=2)
    parser.add_argument("--arrival-rate", type=float, default=0.5)
    parser.add_argument("--mean-exec", type=float, default=4.0)
    parser.add_argument("--repeats", type=int, default=20)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--n-jobs", type=int, default=-1)
    parser.add_argument("--plot", action="store_true", help="save an occupancy chart of the first workload")
    args = parser.parse_args()

    seeds = (np.arange(args.repeats) + args.seed).astype(int)
    common = dict(n_cpu=args.cpus, rr_time=args.rr_time, arrival_rate=args.arrival_rate, mean_exec=args.mean_exec)

    if args.plot:
        sims = {p.name: run_sim_and_metrics(p, args.n_procs, int(seeds[0]), **common)[0] for p in Policy}
        print(f"Occupancy chart saved to: {plot_occupancy(sims)}")

    rows = []
    for policy in Policy:
        results = Parallel(n_jobs=args.n_jobs)(
            delayed(run_metrics_only)(policy, args.n_procs, int(seed), **common)
            for seed in tqdm(seeds, desc=f"{policy.name}", ncols=80)
        )
        summary = summarize(results)

        print("\n" + "=" * 60)
        print(f"{policy.name} (N={args.n_procs}, CPUs={args.cpus}, RR slice={args.rr_time})".center(60))
        print("=" * 60)
        for k, (mean, std) in summary.iterrows():
            print(f"{k:>20s}: {mean:.4f} ± {std:.4f}")

        row = {"policy": policy.name}
        row.update({f"{k}_mean": float(v) for k, v in summary["mean"].items()})
        rows.append(row)

    result_dir = ROOT / "results"
    result_dir.mkdir(parents=True, exist_ok=True)
    csv_file = result_dir / "policy_comparison.csv"
    pd.DataFrame(rows).to_csv(csv_file, index=False)
    print(f"\nResults saved to: {csv_file}")


if __name__ == "__main__":
    main()
