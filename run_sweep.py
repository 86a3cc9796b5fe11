"""Run the evolver over a parameter grid and plot averaged outcomes."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from helloevo.analysis.plots import plot_heatmap, plot_triplets
from helloevo.analysis.regression import SweepRegression
from helloevo.analysis.sweep import (
    DEPENDENT_VARS,
    INDEPENDENT_VARS,
    ParameterSweep,
    pair_averages,
    save_records,
    triplet_averages,
)
from helloevo.config import Config


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a parameter sweep")
    parser.add_argument("--goal", type=str, default=None)
    parser.add_argument("--repeats", type=int, default=None)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--max-generations", type=int, default=None)
    parser.add_argument("--output-dir", type=str, default=None)
    parser.add_argument("--x", choices=INDEPENDENT_VARS, default="survival_rate")
    parser.add_argument("--y", choices=INDEPENDENT_VARS, default="mutation_rate")
    parser.add_argument("--z", choices=INDEPENDENT_VARS, default=None,
                        help="Third axis; also draws the 3D triplet plot")
    parser.add_argument("--value", choices=DEPENDENT_VARS, default="iterations")
    parser.add_argument("--color-value", choices=DEPENDENT_VARS, default="best_distance",
                        help="Value shown as colour in the 3D triplet plot")
    parser.add_argument("--regression", action="store_true",
                        help="Also fit a cubic regression and plot it on a finer grid")
    parser.add_argument("--resolution", type=int, default=25)
    args = parser.parse_args()

    if args.x == args.y:
        parser.error("--x and --y must differ")
    if args.z is not None and args.z in (args.x, args.y):
        parser.error("--z must differ from --x and --y")

    sweep = ParameterSweep(
        config=Config,
        rng=np.random.default_rng(args.seed),
        goal=args.goal,
        repeats=args.repeats,
        max_generations=args.max_generations,
    )

    def progress(done: int, total: int) -> None:
        if done % 10 == 0 or done == total:
            print(f"  {done}/{total} runs")

    records = sweep.run(progress=progress)

    output_dir = Path(args.output_dir or Config.SWEEP_DIR)
    records_path = save_records(records, output_dir / "sweep_records.json")
    print(f"Saved {records_path}")

    saved = [
        plot_heatmap(
            pair_averages(records, args.x, args.y, args.value),
            args.x,
            args.y,
            args.value,
            output_dir / f"heatmap_{args.x}_{args.y}_{args.value}.png",
        )
    ]

    if args.z is not None:
        saved.append(
            plot_triplets(
                triplet_averages(records, args.x, args.y, args.z, args.value),
                triplet_averages(records, args.x, args.y, args.z, args.color_value),
                args.x,
                args.y,
                args.z,
                args.value,
                args.color_value,
                output_dir / f"triplets_{args.x}_{args.y}_{args.z}.png",
            )
        )

    if args.regression:
        regression = SweepRegression(degree=3).fit(records, args.value)
        saved.append(
            plot_heatmap(
                regression.predict_grid(args.x, args.y, resolution=args.resolution),
                args.x,
                args.y,
                f"predicted {args.value}",
                output_dir / f"regression_{args.x}_{args.y}_{args.value}.png",
            )
        )

    for path in saved:
        if path is not None:
            print(f"Saved {path}")


if __name__ == "__main__":
    main()
