"""Survivor selection and coupling strategies."""

from __future__ import annotations

from typing import Sequence

from helloevo.errors import InternalInvariantViolation
from helloevo.evolution.distance import DistanceFn, levenshtein
from helloevo.evolution.individual import Individual

Couple = tuple[Individual, Individual]


class Selection:
    """Survivor selection and parent pairing."""

    @staticmethod
    def get_survivors(
        generation: Sequence[Individual], survivor_count: int
    ) -> list[Individual]:
        """Return the first ``survivor_count`` individuals of a ranked generation."""

        if not 0 < survivor_count <= len(generation):
            raise InternalInvariantViolation(
                f"cannot keep {survivor_count} survivors from {len(generation)}"
            )
        return list(generation[:survivor_count])

    @staticmethod
    def couple(
        survivors: Sequence[Individual],
        distance_fn: DistanceFn = levenshtein,
    ) -> list[Couple]:
        """Pair every survivor with its most dissimilar survivor.

        The partner starts as the survivor itself at distance 0. Candidates
        are scanned in survivor order and only a strictly larger string
        distance replaces the partner, so the first maximum wins. The
        distance is measured between the two strings, not taken from the
        cached distances to the goal. Quadratic in the survivor count.
        """

        if not survivors:
            raise InternalInvariantViolation("cannot couple an empty survivor set")

        couples: list[Couple] = []
        for first in survivors:
            furthest = first
            furthest_dist = 0
            for second in survivors:
                dist = distance_fn(first.string, second.string)
                if dist > furthest_dist:
                    furthest = second
                    furthest_dist = dist
            couples.append((first, furthest))
        return couples
