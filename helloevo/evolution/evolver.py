"""Generational search toward a goal string."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

import numpy as np

from helloevo.config import EvolverConfig
from helloevo.errors import InternalInvariantViolation
from helloevo.evolution.convergence import has_converged
from helloevo.evolution.distance import DistanceFn, levenshtein
from helloevo.evolution.individual import Individual
from helloevo.evolution.operators import GeneticOperators
from helloevo.evolution.population import (
    Generation,
    History,
    generate_seeds,
    rank_generation,
)
from helloevo.evolution.random_source import RandomSource
from helloevo.evolution.selection import Selection
from helloevo.evolution.summary import RunSummary


class EvolverState(str, Enum):
    """Lifecycle of one run."""

    SEEDED = "seeded"
    RUNNING = "running"
    CONVERGED = "converged"


@dataclass
class RunResult:
    """Outcome of :meth:`Evolver.run_to_convergence`."""

    summary: RunSummary
    history: History


GenerationCallback = Callable[["Evolver", Generation], None]


class Evolver:
    """Owns the population and history of one run.

    Generation 0 is seeded on construction. :meth:`step` performs one
    generation transition; :meth:`run_to_convergence` repeats it until the
    best distance plateaus for ``converged_limit`` generations. The loop has
    no iteration cap. Callers that need a bound pass ``on_generation`` and
    raise from it, or drive :meth:`step` themselves.
    """

    def __init__(
        self,
        config: EvolverConfig,
        rng: RandomSource | None = None,
        distance_fn: DistanceFn = levenshtein,
    ) -> None:
        self.config = config
        self.rng = rng or np.random.default_rng()
        self.distance_fn = distance_fn

        self.current_generation: Generation = generate_seeds(
            config.seed_number,
            config.goal,
            self.rng,
            distance_fn=self.distance_fn,
            character_set=config.character_set,
        )
        self.history: History = [self.current_generation]
        self.state = EvolverState.SEEDED

    @property
    def best(self) -> Individual:
        """Lowest-distance individual of the current generation."""
        return self.current_generation[0]

    @property
    def generation_count(self) -> int:
        return len(self.history)

    def step(self) -> Generation:
        """Replace the current generation with its successor and record it."""
        if self.state is EvolverState.SEEDED:
            self.state = EvolverState.RUNNING

        size = self.config.seed_number
        if len(self.current_generation) != size:
            raise InternalInvariantViolation(
                f"current generation holds {len(self.current_generation)} individuals, "
                f"expected {size}"
            )
        survivors = Selection.get_survivors(
            self.current_generation, self.config.survivor_count
        )
        remaining = size - len(survivors)
        coupled = Selection.couple(survivors, self.distance_fn)
        offspring = GeneticOperators.reproduce(
            coupled,
            remaining,
            self.config.goal,
            self.config.mutation_rate,
            self.rng,
            distance_fn=self.distance_fn,
            character_set=self.config.character_set,
        )

        generation = rank_generation(offspring + survivors)
        if len(generation) != size:
            raise InternalInvariantViolation(
                f"population drifted from {size} to {len(generation)}"
            )

        self.current_generation = generation
        self.history.append(generation)
        return generation

    def has_converged(self) -> bool:
        return has_converged(self.history, self.config.converged_limit)

    def run_to_convergence(
        self, on_generation: GenerationCallback | None = None
    ) -> RunResult:
        """Evolve until convergence and summarize the final generation."""
        while self.state is not EvolverState.CONVERGED:
            generation = self.step()
            if self.has_converged():
                self.state = EvolverState.CONVERGED
            if on_generation is not None:
                on_generation(self, generation)

        return RunResult(summary=self.summarize(), history=self.history)

    def summarize(self) -> RunSummary:
        """Statistics of the latest generation."""
        return RunSummary.from_history(self.history)
