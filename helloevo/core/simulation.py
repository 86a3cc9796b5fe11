"""Run controller around a single evolver."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from numpy.random import Generator

from helloevo.analysis.statistics import Statistics
from helloevo.config import Config, EvolverConfig
from helloevo.errors import GenerationLimitReached
from helloevo.evolution.evolver import Evolver, RunResult
from helloevo.evolution.population import Generation
from helloevo.evolution.summary import RunSummary


class EvolutionRun:
    """Drive an evolver to convergence with progress output and an optional cap."""

    def __init__(
        self,
        params: EvolverConfig | None = None,
        config: type[Config] | None = None,
        rng: Generator | None = None,
        max_generations: int | None = None,
        verbose: bool = True,
        print_every: int = 1,
    ) -> None:
        self.config = config or Config
        self.params = params or EvolverConfig.from_config(self.config)
        self.rng = rng or np.random.default_rng()
        self.max_generations = max_generations
        self.verbose = verbose
        self.print_every = max(1, print_every)

        self.evolver = Evolver(self.params, rng=self.rng)
        self.converged = False

    def run(self) -> RunResult:
        """Run to convergence, or until ``max_generations`` is reached.

        Raises:
            GenerationLimitReached: the cap was hit first. The evolver keeps
                the partial history for inspection.
        """
        if self.verbose:
            self._print_generation_summary(0, self.evolver.current_generation)
        result = self.evolver.run_to_convergence(on_generation=self._on_generation)
        self.converged = True
        if self.verbose:
            self._print_final_summary(result.summary)
        return result

    def run_capped(self) -> RunResult:
        """Like :meth:`run`, but return the partial result when the cap is hit."""
        try:
            return self.run()
        except GenerationLimitReached:
            summary = self.evolver.summarize()
            if self.verbose:
                print(f"\nStopped after {summary.iterations} generations (no plateau)")
                self._print_final_summary(summary)
            return RunResult(summary=summary, history=self.evolver.history)

    def plot(self, output_dir: str | Path | None = None) -> list[Path]:
        """Save mean/best distance plots of the run's history."""
        from helloevo.analysis.plots import HistoryPlotter

        out = Path(output_dir or self.config.ANALYSIS_DIR)
        plotter = HistoryPlotter(goal_length=len(self.params.goal))
        return plotter.plot_history(self.evolver.history, out)

    def _on_generation(self, evolver: Evolver, generation: Generation) -> None:
        index = evolver.generation_count - 1
        if self.verbose and index % self.print_every == 0:
            self._print_generation_summary(index, generation)
        if evolver.has_converged():
            return
        if self.max_generations is not None and index >= self.max_generations:
            raise GenerationLimitReached(self.max_generations)

    def _print_generation_summary(self, gen: int, generation: Generation) -> None:
        """Print generational summary."""
        distances = Statistics.distances(generation)
        print(
            f"Gen {gen:5d} | best {generation[0].distance:3d} "
            f"| mean {Statistics.mean(distances):6.2f} | {generation[0].string!r}"
        )

    def _print_final_summary(self, summary: RunSummary) -> None:
        """Print final run statistics."""
        print("\n" + "=" * 60)
        print(f"Goal: {self.params.goal!r}")
        print("=" * 60)
        for row in summary.as_rows():
            value = row["value"]
            if isinstance(value, float):
                value = f"{value:.3f}"
            elif isinstance(value, str):
                value = repr(value)
            print(f"  {row['name']:<11}{value}")
