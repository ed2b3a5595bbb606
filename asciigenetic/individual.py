"""Candidate solutions for the genetic search: grids of characters."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from typing import Iterable, Union

ALLOWED_CHARS = b" <>,./?\\|[]{}-_=+OX`~;:'\"!@#$%^&*()8"
"""Characters the search may place in the art."""

BACKGROUND_CHAR = ord(" ")
NON_SPACE_CHARS = bytes(c for c in ALLOWED_CHARS if c != BACKGROUND_CHAR)

INIT_RANDOM_PROB = 0.05
"""Share of positions that get a random character when seeding with one character."""


def _random_code(background_prob: float) -> int:
    """A space with probability ``background_prob``, otherwise a random non-space character."""
    if _random.random() < background_prob:
        return BACKGROUND_CHAR
    return _random.choice(NON_SPACE_CHARS)


@dataclass
class Individual:
    """A grid of character codes, row by row, with its last computed fitness."""

    chars: bytearray = field(default_factory=bytearray)
    fitness: float = 0.0

    def __post_init__(self) -> None:
        if isinstance(self.chars, str):
            self.chars = bytearray(self.chars, "latin-1")
        elif not isinstance(self.chars, bytearray):
            self.chars = bytearray(self.chars)

    @classmethod
    def random(cls, size: int, background_prob: float = 0.0) -> "Individual":
        """Make ``size`` random characters, each a space with probability ``background_prob``."""
        return cls(bytearray(_random_code(background_prob) for _ in range(size)))

    @classmethod
    def with_init_char(cls, size: int, init_char: Union[str, int]) -> "Individual":
        """Fill with ``init_char`` except for about 5% random characters.

        A character outside the allowed set is replaced by a space.
        """
        if isinstance(init_char, str):
            if len(init_char) != 1:
                raise ValueError("init_char must be a single character")
            code = ord(init_char)
        else:
            code = int(init_char)
        if code not in ALLOWED_CHARS:
            code = BACKGROUND_CHAR

        return cls(
            bytearray(
                _random.choice(ALLOWED_CHARS)
                if _random.random() < INIT_RANDOM_PROB
                else code
                for _ in range(size)
            )
        )

    def crossover(
        self, other: "Individual", crossover_rate: float
    ) -> tuple["Individual", "Individual"]:
        """Uniform crossover: swap each shared position with probability ``crossover_rate``."""
        first = bytearray(self.chars)
        second = bytearray(other.chars)
        for position, (mine, theirs) in enumerate(zip(self.chars, other.chars)):
            if _random.random() < crossover_rate:
                first[position] = theirs
                second[position] = mine
        return Individual(first), Individual(second)

    def mutate(self, mutation_rate: float, background_prob: float = 0.0) -> None:
        """Replace each character with probability ``mutation_rate`` by a fresh random one."""
        for position in range(len(self.chars)):
            if _random.random() < mutation_rate:
                self.chars[position] = _random_code(background_prob)

    def __str__(self) -> str:
        return self.chars.decode("latin-1")


def codes(chars: Union[str, bytes, Iterable[int]]) -> bytearray:
    """Normalise a character sequence to a mutable array of byte codes."""
    return Individual(chars).chars