"""Plateau detection over a run's history."""

from __future__ import annotations

from typing import Sequence

from helloevo.evolution.population import Generation, best_distances


def has_converged(history: Sequence[Generation], converged_limit: int) -> bool:
    """True once the last ``converged_limit`` generations share one best distance.

    A plateau above zero counts: the search can settle on a non-optimal best.
    """
    if len(history) < converged_limit:
        return False
    trailing = best_distances(history[len(history) - converged_limit :])
    return len(set(trailing)) == 1
