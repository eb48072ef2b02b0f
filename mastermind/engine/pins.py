"""
Compact peg-combination encoding.

A Combination packs P small color indices into one integer so it can be
copied, compared and hashed by value. Storage format:

  |<--bits_per_position-->|...|<--bits_per_position-->|<--bits_per_position-->|
  |     position P-1      |...|      position 1       |      position 0       |
  most significant                                          least significant

Each position owns a disjoint bit field, so reading or writing a position is a
shift and a mask. When C is not a power of two some packed values are unused
(e.g. 4 positions x 6 colors = 1296 combinations spread over 12 bits); the
alternative, a dense mixed-radix number, would make get() a division.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator, Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .errors import InvalidCombination


class Combination:
    """Immutable packed combination. Use `make` to build one from colors."""

    __slots__ = ("config", "value")

    def __init__(self, value: int = 0, config: GameConfig = DEFAULT_CONFIG):
        object.__setattr__(self, "config", config)
        object.__setattr__(self, "value", value)
        for i in range(config.positions):
            if self.get(i) >= config.colors:
                raise InvalidCombination(
                    f"position {i} holds color {self.get(i)}; colors are 0..{config.colors - 1}")
        if value >> (config.positions * config.bits_per_position):
            raise InvalidCombination(f"packed value {value:#x} has bits beyond position {config.positions - 1}")

    def __setattr__(self, name, value):
        raise AttributeError("Combination is immutable")

    @classmethod
    def make(cls, *values: int, config: GameConfig = DEFAULT_CONFIG) -> "Combination":
        """Build a combination from P colors given in position order."""
        if len(values) != config.positions:
            raise InvalidCombination(f"expected {config.positions} colors, got {len(values)}")
        packed = 0
        shift = config.bits_per_position
        for i, v in enumerate(values):
            if not 0 <= v < config.colors:
                raise InvalidCombination(f"color {v} at position {i} is outside 0..{config.colors - 1}")
            packed |= v << (i * shift)
        return cls(packed, config)

    @classmethod
    def zero(cls, config: GameConfig = DEFAULT_CONFIG) -> "Combination":
        return cls(0, config)

    @classmethod
    def opening(cls, config: GameConfig = DEFAULT_CONFIG) -> "Combination":
        return cls.make(*config.opening_values, config=config)

    def get(self, position: int) -> int:
        if not 0 <= position < self.config.positions:
            raise IndexError(f"position {position} out of range 0..{self.config.positions - 1}")
        return (self.value >> (position * self.config.bits_per_position)) & self.config.mask

    def set(self, position: int, color: int) -> "Combination":
        """Return a copy with `position` overwritten. `color` must be a valid index (< C)."""
        if not 0 <= position < self.config.positions:
            raise IndexError(f"position {position} out of range 0..{self.config.positions - 1}")
        if not 0 <= color < self.config.colors:
            raise InvalidCombination(f"color {color} is outside 0..{self.config.colors - 1}")
        shift = position * self.config.bits_per_position
        cleared = self.value & ~(self.config.mask << shift)
        return Combination(cleared | (color << shift), self.config)

    def successor(self) -> "Combination":
        """
        Next combination in canonical order: a mixed-radix +1 starting at
        position 0 with carry upward. The last combination wraps to zero.
        """
        c = self
        top = self.config.colors - 1
        for i in range(self.config.positions):
            v = c.get(i)
            if v < top:
                return c.set(i, v + 1)
            c = c.set(i, 0)
        return c

    def values(self) -> Tuple[int, ...]:
        return tuple(self.get(i) for i in range(self.config.positions))

    def __iter__(self) -> Iterator[int]:
        return iter(self.values())

    def __len__(self) -> int:
        return self.config.positions

    def __eq__(self, other) -> bool:
        if not isinstance(other, Combination):
            return NotImplemented
        return self.value == other.value and self.config == other.config

    def __hash__(self) -> int:
        return hash((self.value, self.config))

    def __repr__(self) -> str:
        return repr(self.values())


@lru_cache(maxsize=None)
def all_combinations(config: GameConfig = DEFAULT_CONFIG) -> Tuple[Combination, ...]:
    """
    The whole C**P space in canonical enumeration order: zero first, then
    repeated successor(). Cached per configuration.
    """
    out = []
    c = Combination.zero(config)
    for _ in range(config.total_configs):
        out.append(c)
        c = c.successor()
    return tuple(out)
