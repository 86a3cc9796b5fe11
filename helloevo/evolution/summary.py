"""Final-generation summary returned by a run."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np

from helloevo.evolution.individual import Individual


@dataclass(frozen=True)
class RunSummary:
    """Statistics of the final generation of a run.

    ``mode`` is the smallest of the most frequent distances and ``stdev`` the
    population standard deviation.
    """

    iterations: int
    mean: float
    median: float
    mode: float
    stdev: float
    best: str
    best_distance: int

    @classmethod
    def from_history(cls, history: Sequence[Sequence[Individual]]) -> "RunSummary":
        """Summarize the last generation of a history."""
        if not history or not history[-1]:
            raise ValueError("history must end with a non-empty generation")
        last = history[-1]
        distances = np.array([ind.distance for ind in last], dtype=np.int64)
        values, counts = np.unique(distances, return_counts=True)
        return cls(
            iterations=len(history),
            mean=float(np.mean(distances)),
            median=float(np.median(distances)),
            mode=float(values[np.argmax(counts)]),
            stdev=float(np.std(distances, ddof=0)),
            best=last[0].string,
            best_distance=last[0].distance,
        )

    def as_rows(self) -> list[dict[str, Any]]:
        """Name/value rows in display order."""
        return [
            {"name": "iterations", "value": self.iterations},
            {"name": "mean", "value": self.mean},
            {"name": "median", "value": self.median},
            {"name": "mode", "value": self.mode},
            {"name": "stdev", "value": self.stdev},
            {"name": "best", "value": self.best},
        ]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
