"""Genetic string evolution toward a fixed goal."""

from __future__ import annotations

__version__ = "0.1.0"
