"""Exceptions raised by the evolver and its run controllers."""

from __future__ import annotations


class EvolutionError(Exception):
    """Base class for helloevo errors."""


class InvalidConfiguration(EvolutionError, ValueError):
    """A configuration value is outside its valid range."""


class InternalInvariantViolation(EvolutionError, RuntimeError):
    """A transition or coupling invariant was broken.

    Always a bug in the evolution logic, never a recoverable condition.
    """


class GenerationLimitReached(EvolutionError):
    """A run controller stopped a run at its generation cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"generation limit of {limit} reached before convergence")
        self.limit = limit
