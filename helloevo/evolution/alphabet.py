"""Character set candidate strings are drawn from."""

from __future__ import annotations

import string
from typing import Sequence

from helloevo.evolution.random_source import RandomSource

CHARACTER_SET: tuple[str, ...] = tuple(string.ascii_lowercase) + (" ",)


def random_letter(
    rng: RandomSource, character_set: Sequence[str] = CHARACTER_SET
) -> str:
    """Draw one character uniformly from the character set."""
    return character_set[int(rng.integers(0, len(character_set)))]


def random_string(
    length: int,
    rng: RandomSource,
    character_set: Sequence[str] = CHARACTER_SET,
) -> str:
    """Draw a string of independent uniform characters."""
    return "".join(random_letter(rng, character_set) for _ in range(length))
