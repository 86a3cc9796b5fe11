"""Genetic operators: crossover and mutation."""

from __future__ import annotations

from typing import Sequence

from helloevo.errors import InternalInvariantViolation
from helloevo.evolution.alphabet import CHARACTER_SET, random_letter
from helloevo.evolution.distance import DistanceFn, levenshtein
from helloevo.evolution.individual import Individual
from helloevo.evolution.random_source import RandomSource
from helloevo.evolution.selection import Couple


class GeneticOperators:
    """Genetic operators for candidate strings."""

    @staticmethod
    def crossover(
        parent1: str,
        parent2: str,
        mutation_rate: float,
        rng: RandomSource,
        character_set: Sequence[str] = CHARACTER_SET,
    ) -> str:
        """Blend two parents one character at a time, with uniform mutation.

        For every position a draw below ``mutation_rate`` replaces the
        character with a random one; otherwise a fair coin picks which
        parent's character is copied.
        """

        parents = (parent1, parent2)
        letters = []
        for j in range(len(parent1)):
            if rng.random() < mutation_rate:
                letters.append(random_letter(rng, character_set))
            else:
                letters.append(parents[int(rng.integers(0, 2))][j])
        return "".join(letters)

    @staticmethod
    def reproduce(
        coupled: Sequence[Couple],
        remaining: int,
        goal: str,
        mutation_rate: float,
        rng: RandomSource,
        distance_fn: DistanceFn = levenshtein,
        character_set: Sequence[str] = CHARACTER_SET,
    ) -> list[Individual]:
        """Synthesize ``remaining`` offspring, cycling through the couples."""

        if remaining < 0:
            raise InternalInvariantViolation(
                f"offspring count must be >= 0, got {remaining}"
            )
        if remaining and not coupled:
            raise InternalInvariantViolation("cannot reproduce without couples")

        offspring: list[Individual] = []
        for idx in range(remaining):
            first, second = coupled[idx % len(coupled)]
            string = GeneticOperators.crossover(
                first.string,
                second.string,
                mutation_rate,
                rng,
                character_set,
            )
            offspring.append(Individual.create(string, goal, distance_fn))
        return offspring
