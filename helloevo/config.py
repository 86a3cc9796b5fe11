"""Project-wide configuration constants."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from helloevo.errors import InvalidConfiguration
from helloevo.evolution.alphabet import CHARACTER_SET


@dataclass(frozen=True)
class Config:
    """Central configuration constants for helloevo."""

    # Evolution parameters
    SEED_NUMBER: ClassVar[int] = 100  # Population size
    SURVIVAL_RATE: ClassVar[float] = 0.5  # Fraction kept unmodified each generation
    MUTATION_RATE: ClassVar[float] = 0.01  # Per-character replacement probability
    GOAL: ClassVar[str] = "hello world"  # Target string
    CONVERGED_LIMIT: ClassVar[int] = 10  # Trailing generations with equal best
    CHARACTER_SET: ClassVar[tuple[str, ...]] = CHARACTER_SET

    # Sweep parameters
    SWEEP_SEED_NUMBERS: ClassVar[tuple[int, ...]] = (20, 50, 100)
    SWEEP_SURVIVAL_RATES: ClassVar[tuple[float, ...]] = (0.2, 0.5, 0.8)
    SWEEP_MUTATION_RATES: ClassVar[tuple[float, ...]] = (0.0, 0.01, 0.05)
    SWEEP_CONVERGED_LIMITS: ClassVar[tuple[int, ...]] = (5, 10)
    SWEEP_REPEATS: ClassVar[int] = 3
    SWEEP_MAX_GENERATIONS: ClassVar[int] = 1000  # Per-run cap inside a sweep

    # Path parameters
    DATA_DIR: ClassVar[str] = "data"  # Base data directory
    ANALYSIS_DIR: ClassVar[str] = "data/analysis"  # Plots from single runs
    SWEEP_DIR: ClassVar[str] = "data/sweeps"  # Sweep records and heatmaps

    @classmethod
    def create_dirs(cls) -> None:
        """Create required data directories."""
        for path in (cls.DATA_DIR, cls.ANALYSIS_DIR, cls.SWEEP_DIR):
            Path(path).mkdir(parents=True, exist_ok=True)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class EvolverConfig:
    """Validated, immutable parameters of one evolver run."""

    seed_number: int
    survival_rate: float
    mutation_rate: float
    goal: str
    converged_limit: int
    character_set: tuple[str, ...] = field(default=CHARACTER_SET)

    def __post_init__(self) -> None:
        if isinstance(self.seed_number, bool) or not isinstance(self.seed_number, int):
            raise InvalidConfiguration("seed_number must be an integer")
        if self.seed_number < 1:
            raise InvalidConfiguration(
                f"seed_number must be >= 1, got {self.seed_number}"
            )
        if not 0.0 < self.survival_rate <= 1.0:
            raise InvalidConfiguration(
                f"survival_rate must be in (0, 1], got {self.survival_rate}"
            )
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise InvalidConfiguration(
                f"mutation_rate must be in [0, 1], got {self.mutation_rate}"
            )
        if not isinstance(self.goal, str) or not self.goal:
            raise InvalidConfiguration("goal must be a non-empty string")
        if (
            isinstance(self.converged_limit, bool)
            or not isinstance(self.converged_limit, int)
            or self.converged_limit < 1
        ):
            raise InvalidConfiguration(
                f"converged_limit must be an integer >= 1, got {self.converged_limit}"
            )

        charset = tuple(self.character_set)
        if not charset:
            raise InvalidConfiguration("character_set must not be empty")
        if any(not isinstance(ch, str) or len(ch) != 1 for ch in charset):
            raise InvalidConfiguration("character_set entries must be single characters")
        object.__setattr__(self, "character_set", charset)

        if self.survivor_count < 1:
            raise InvalidConfiguration(
                "survival_rate * seed_number rounds to zero survivors "
                f"({self.survival_rate} * {self.seed_number})"
            )

    @property
    def survivor_count(self) -> int:
        """Individuals carried unmodified into the next generation."""
        return round_half_up(self.survival_rate * self.seed_number)

    @property
    def offspring_count(self) -> int:
        """Individuals synthesized each generation."""
        return self.seed_number - self.survivor_count

    @classmethod
    def from_config(
        cls, config: type[Config] | None = None, **overrides: Any
    ) -> "EvolverConfig":
        """Build run parameters from a Config class, with keyword overrides."""
        source = config or Config
        params: dict[str, Any] = {
            "seed_number": source.SEED_NUMBER,
            "survival_rate": source.SURVIVAL_RATE,
            "mutation_rate": source.MUTATION_RATE,
            "goal": source.GOAL,
            "converged_limit": source.CONVERGED_LIMIT,
            "character_set": source.CHARACTER_SET,
        }
        unknown = set(overrides) - set(params)
        if unknown:
            raise InvalidConfiguration(f"unknown parameters: {sorted(unknown)}")
        params.update(overrides)
        return cls(**params)
