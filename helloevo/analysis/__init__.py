"""Analysis module for helloevo runs."""

from __future__ import annotations

from helloevo.analysis.statistics import (
    GenerationSeries,
    Statistics,
    generation_series,
)

__all__ = [
    "GenerationSeries",
    "Statistics",
    "generation_series",
]
