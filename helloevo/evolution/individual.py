"""Candidate string with its cached distance to the goal."""

from __future__ import annotations

from dataclasses import dataclass

from helloevo.evolution.distance import DistanceFn, levenshtein


@dataclass(frozen=True)
class Individual:
    """One candidate string.

    ``distance`` is the edit distance to the goal, computed once in
    :meth:`create` and never recomputed afterwards.
    """

    string: str
    distance: int

    @classmethod
    def create(
        cls, string: str, goal: str, distance_fn: DistanceFn = levenshtein
    ) -> "Individual":
        """Wrap a string, scoring it against the goal."""
        return cls(string=string, distance=int(distance_fn(goal, string)))

    def to_dict(self) -> dict[str, str | int]:
        return {"string": self.string, "distance": self.distance}
