"""Edit distance used both for fitness and for coupling."""

from __future__ import annotations

from typing import Callable

import numpy as np

DistanceFn = Callable[[str, str], int]


def _codes(text: str) -> np.ndarray:
    return np.fromiter((ord(ch) for ch in text), dtype=np.int64, count=len(text))


def levenshtein(first: str, second: str) -> int:
    """Minimum number of single-character inserts, deletes and substitutions.

    Row-by-row dynamic programming. Substitutions and deletions are computed
    for a whole row at once; insertions are resolved with a running minimum
    over ``row - index``.
    """
    if first == second:
        return 0
    if not first:
        return len(second)
    if not second:
        return len(first)

    target = _codes(second)
    index = np.arange(len(second) + 1, dtype=np.int64)
    previous = index.copy()
    current = np.empty_like(previous)

    for i, code in enumerate(_codes(first), start=1):
        current[0] = i
        substitute = previous[:-1] + (target != code)
        delete = previous[1:] + 1
        current[1:] = np.minimum(substitute, delete)
        current = np.minimum.accumulate(current - index) + index
        previous, current = current, previous

    return int(previous[-1])
