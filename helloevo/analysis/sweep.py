"""Parameter sweeps over many evolver runs."""

from __future__ import annotations

import itertools
import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Iterable, Sequence

import numpy as np
from numpy.random import Generator

from helloevo.config import Config, EvolverConfig
from helloevo.core.simulation import EvolutionRun
from helloevo.errors import InvalidConfiguration

INDEPENDENT_VARS = ("seed_number", "survival_rate", "mutation_rate", "converged_limit")
DEPENDENT_VARS = ("iterations", "best_distance", "mean", "stdev", "solved", "converged")


@dataclass
class SweepRecord:
    """Inputs and outcome of one run in a sweep."""

    seed_number: int
    survival_rate: float
    mutation_rate: float
    converged_limit: int
    repeat: int
    iterations: int
    best_distance: int
    mean: float
    stdev: float
    solved: bool
    converged: bool


class ParameterSweep:
    """Run the evolver over a grid of parameters, sequentially."""

    def __init__(
        self,
        config: type[Config] | None = None,
        rng: Generator | None = None,
        goal: str | None = None,
        repeats: int | None = None,
        max_generations: int | None = None,
    ) -> None:
        self.config = config or Config
        self.rng = rng or np.random.default_rng()
        self.goal = goal if goal is not None else self.config.GOAL
        self.repeats = repeats if repeats is not None else self.config.SWEEP_REPEATS
        if self.repeats < 1:
            raise InvalidConfiguration(f"repeats must be >= 1, got {self.repeats}")
        self.max_generations = (
            max_generations
            if max_generations is not None
            else self.config.SWEEP_MAX_GENERATIONS
        )
        self.records: list[SweepRecord] = []

    def grid(self) -> list[EvolverConfig]:
        """Every parameter combination, validated before any run starts."""
        return [
            EvolverConfig.from_config(
                self.config,
                seed_number=seed_number,
                survival_rate=survival_rate,
                mutation_rate=mutation_rate,
                converged_limit=converged_limit,
                goal=self.goal,
            )
            for seed_number, survival_rate, mutation_rate, converged_limit in itertools.product(
                self.config.SWEEP_SEED_NUMBERS,
                self.config.SWEEP_SURVIVAL_RATES,
                self.config.SWEEP_MUTATION_RATES,
                self.config.SWEEP_CONVERGED_LIMITS,
            )
        ]

    def run(
        self, progress: Callable[[int, int], None] | None = None
    ) -> list[SweepRecord]:
        """Run every combination ``repeats`` times and collect the records."""
        grid = self.grid()
        total = len(grid) * self.repeats
        done = 0
        for params in grid:
            for repeat in range(self.repeats):
                self.records.append(self.run_one(params, repeat))
                done += 1
                if progress is not None:
                    progress(done, total)
        return self.records

    def run_one(self, params: EvolverConfig, repeat: int = 0) -> SweepRecord:
        run = EvolutionRun(
            params,
            config=self.config,
            rng=self.rng,
            max_generations=self.max_generations,
            verbose=False,
        )
        summary = run.run_capped().summary
        return SweepRecord(
            seed_number=params.seed_number,
            survival_rate=params.survival_rate,
            mutation_rate=params.mutation_rate,
            converged_limit=params.converged_limit,
            repeat=repeat,
            iterations=summary.iterations,
            best_distance=summary.best_distance,
            mean=summary.mean,
            stdev=summary.stdev,
            solved=summary.best_distance == 0,
            converged=run.converged,
        )


def _check_axes(axes: Sequence[str], value: str) -> None:
    for axis in axes:
        if axis not in INDEPENDENT_VARS:
            raise ValueError(f"axes must be among {INDEPENDENT_VARS}, got {axis!r}")
    if len(set(axes)) != len(axes):
        raise ValueError("axes must differ")
    if value not in DEPENDENT_VARS:
        raise ValueError(f"value must be among {DEPENDENT_VARS}")


def _bucket_averages(
    records: Iterable[SweepRecord], axes: Sequence[str], value: str
) -> dict[tuple, float]:
    _check_axes(axes, value)
    buckets: dict[tuple, list[float]] = {}
    for record in records:
        key = tuple(getattr(record, axis) for axis in axes)
        buckets.setdefault(key, []).append(float(getattr(record, value)))
    return {key: float(np.mean(values)) for key, values in buckets.items()}


def pair_averages(
    records: Iterable[SweepRecord], x: str, y: str, value: str
) -> dict[tuple[float, float], float]:
    """Average ``value`` for each pair of ``x`` and ``y`` values."""
    return _bucket_averages(records, (x, y), value)


def triplet_averages(
    records: Iterable[SweepRecord], x: str, y: str, z: str, value: str
) -> dict[tuple[float, float, float], float]:
    """Average ``value`` for each triplet of ``x``, ``y`` and ``z`` values."""
    return _bucket_averages(records, (x, y, z), value)


def save_records(records: Sequence[SweepRecord], path: str | Path) -> Path:
    """Write sweep records as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([asdict(record) for record in records], f, indent=2)
    return path


def load_records(path: str | Path) -> list[SweepRecord]:
    """Read sweep records written by :func:`save_records`."""
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    return [SweepRecord(**item) for item in payload]
