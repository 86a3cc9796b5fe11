"""Evolution module for goal-string search."""

from __future__ import annotations

__all__ = [
    "alphabet",
    "random_source",
    "distance",
    "individual",
    "population",
    "selection",
    "operators",
    "convergence",
    "summary",
    "evolver",
]
