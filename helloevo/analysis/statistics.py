"""Summary statistics over generation distances."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats

from helloevo.evolution.individual import Individual


class Statistics:
    """Descriptive statistics for distance samples."""

    @staticmethod
    def mean(values: Sequence[float] | np.ndarray) -> float:
        """Arithmetic mean."""
        return float(np.mean(_require(values)))

    @staticmethod
    def median(values: Sequence[float] | np.ndarray) -> float:
        """Median, averaging the two middle values for even counts."""
        return float(np.median(_require(values)))

    @staticmethod
    def mode(values: Sequence[float] | np.ndarray) -> float:
        """Most frequent value; the smallest one when several tie."""
        result = stats.mode(_require(values), keepdims=False)
        return float(result.mode)

    @staticmethod
    def stdev(values: Sequence[float] | np.ndarray) -> float:
        """Population standard deviation (ddof=0)."""
        return float(np.std(_require(values), ddof=0))

    @staticmethod
    def distances(generation: Sequence[Individual]) -> np.ndarray:
        """Distances of a generation as an integer array."""
        return np.array([ind.distance for ind in generation], dtype=np.int64)


def _require(values: Sequence[float] | np.ndarray) -> np.ndarray:
    array = np.asarray(values)
    if array.size == 0:
        raise ValueError("values must not be empty")
    return array


@dataclass
class GenerationSeries:
    """Per-generation distance statistics of a run."""

    generation: list[int]
    mean_distance: list[float]
    median_distance: list[float]
    mode_distance: list[float]
    stdev_distance: list[float]
    best_distance: list[int]


def generation_series(history: Sequence[Sequence[Individual]]) -> GenerationSeries:
    """Time series of distance statistics, one entry per generation."""
    series = GenerationSeries(
        generation=[],
        mean_distance=[],
        median_distance=[],
        mode_distance=[],
        stdev_distance=[],
        best_distance=[],
    )
    for idx, generation in enumerate(history):
        distances = Statistics.distances(generation)
        series.generation.append(idx)
        series.mean_distance.append(Statistics.mean(distances))
        series.median_distance.append(Statistics.median(distances))
        series.mode_distance.append(Statistics.mode(distances))
        series.stdev_distance.append(Statistics.stdev(distances))
        series.best_distance.append(int(distances[0]))
    return series
