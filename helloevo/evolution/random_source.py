"""Random source capability used by every stochastic operation."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Subset of ``numpy.random.Generator`` the evolver relies on.

    ``integers(low, high)`` returns a uniform integer in ``[low, high)`` and
    ``random()`` a uniform float in ``[0, 1)``. Tests pass scripted sources
    implementing the same two methods.
    """

    def integers(self, low: int, high: int) -> int: ...

    def random(self) -> float: ...
