"""
Game configuration: number of positions (P) and number of colors (C).

Everything else the engine needs is derived from these two numbers here,
once, so nothing downstream hardcodes 4 pins / 8 colors / 14 scores.

Packing constraint:
  Each position takes `bits_per_position` bits of a packed integer, so
  P * bits_per_position must fit in `word_bits` (16 by default). With 16 bits:
    - 3 positions, <= 32 colors
    - 4 positions, <= 16 colors
    - 5 positions, <= 8 colors
    - 6 positions, <= 4 colors
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Tuple

# (black, white)
Score = Tuple[int, int]

DEFAULT_WORD_BITS = 16


@dataclass(frozen=True)
class GameConfig:
    positions: int = 4
    colors: int = 8
    word_bits: int = DEFAULT_WORD_BITS

    def __post_init__(self):
        if self.positions < 1:
            raise ValueError(f"positions must be >= 1; got {self.positions}")
        if self.colors < 2:
            raise ValueError(f"colors must be >= 2; got {self.colors}")
        needed = self.positions * self.bits_per_position
        if needed > self.word_bits:
            raise ValueError(
                f"{self.positions} positions x {self.bits_per_position} bits = {needed} bits "
                f"does not fit in a {self.word_bits}-bit word")

    @cached_property
    def bits_per_position(self) -> int:
        return max(1, (self.colors - 1).bit_length())

    @cached_property
    def mask(self) -> int:
        """Bit mask for a single position's field (unshifted)."""
        return (1 << self.bits_per_position) - 1

    @cached_property
    def total_configs(self) -> int:
        return self.colors ** self.positions

    @cached_property
    def win_score(self) -> Score:
        return (self.positions, 0)

    @cached_property
    def all_scores(self) -> Tuple[Score, ...]:
        """
        Every achievable score, ordered by black then white.

        Any pair summing to P or less is possible except (P-1, 1): if all but
        one peg is exact, the last one cannot be a color-only match.
        """
        p = self.positions
        return tuple(
            (black, white)
            for black in range(p + 1)
            for white in range(p + 1 - black)
            if (black, white) != (p - 1, 1)
        )

    @cached_property
    def opening_values(self) -> Tuple[int, ...]:
        """
        Canonical first guess: half the pegs color 0, the rest color 1.
        For P=4 this is (0, 0, 1, 1).
        """
        half = self.positions // 2
        return tuple(0 if i < half else 1 for i in range(self.positions))


DEFAULT_CONFIG = GameConfig()
