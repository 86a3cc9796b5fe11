"""Evolve random strings toward a goal string."""

from __future__ import annotations

import argparse

import numpy as np

from helloevo.config import Config, EvolverConfig
from helloevo.core.simulation import EvolutionRun


def main() -> None:
    parser = argparse.ArgumentParser(description="Run goal-string evolution")
    parser.add_argument("--goal", type=str, default=None)
    parser.add_argument("--population", type=int, default=None)
    parser.add_argument("--survival-rate", type=float, default=None)
    parser.add_argument("--mutation-rate", type=float, default=None)
    parser.add_argument("--converged-limit", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--max-generations",
        type=int,
        default=None,
        help="Stop after this many generations even without a plateau",
    )
    parser.add_argument("--print-every", type=int, default=1)
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    parser.add_argument("--plot", action="store_true", help="Save distance plots")
    parser.add_argument("--output-dir", type=str, default=None)
    args = parser.parse_args()

    class RunConfig(Config):
        SEED_NUMBER = (
            args.population if args.population is not None else Config.SEED_NUMBER
        )
        SURVIVAL_RATE = (
            args.survival_rate if args.survival_rate is not None else Config.SURVIVAL_RATE
        )
        MUTATION_RATE = (
            args.mutation_rate if args.mutation_rate is not None else Config.MUTATION_RATE
        )
        GOAL = args.goal if args.goal is not None else Config.GOAL
        CONVERGED_LIMIT = (
            args.converged_limit
            if args.converged_limit is not None
            else Config.CONVERGED_LIMIT
        )

    params = EvolverConfig.from_config(RunConfig)
    rng = np.random.default_rng(args.seed)

    run = EvolutionRun(
        params,
        config=RunConfig,
        rng=rng,
        max_generations=args.max_generations,
        verbose=not args.quiet,
        print_every=args.print_every,
    )
    result = run.run_capped()

    if args.quiet:
        for row in result.summary.as_rows():
            print(f"{row['name']}: {row['value']}")

    if args.plot:
        for path in run.plot(args.output_dir):
            print(f"Saved {path}")


if __name__ == "__main__":
    main()
