"""Seed generation and ranking of generations."""

from __future__ import annotations

from typing import Iterable, Sequence

from helloevo.errors import InvalidConfiguration
from helloevo.evolution.alphabet import CHARACTER_SET, random_string
from helloevo.evolution.distance import DistanceFn, levenshtein
from helloevo.evolution.individual import Individual
from helloevo.evolution.random_source import RandomSource

Generation = list[Individual]
History = list[Generation]


def rank_generation(individuals: Iterable[Individual]) -> Generation:
    """Sort ascending by distance; ties keep their incoming order."""
    return sorted(individuals, key=lambda ind: ind.distance)


def generate_seeds(
    seed_number: int,
    goal: str,
    rng: RandomSource,
    distance_fn: DistanceFn = levenshtein,
    character_set: Sequence[str] = CHARACTER_SET,
) -> Generation:
    """Build generation 0 from uniformly random strings as long as the goal."""
    if seed_number < 1:
        raise InvalidConfiguration(f"seed_number must be >= 1, got {seed_number}")
    if not goal:
        raise InvalidConfiguration("goal must be a non-empty string")

    seeds = [
        Individual.create(random_string(len(goal), rng, character_set), goal, distance_fn)
        for _ in range(seed_number)
    ]
    return rank_generation(seeds)


def best_distances(history: Sequence[Generation]) -> list[int]:
    """Best (first) distance of every generation."""
    return [generation[0].distance for generation in history]
