"""
Lightweight input parsing and validation.

This module answers the question: "Is this text a usable score / combination?"
Everything here raises plain ValueError (or returns False) so an interactive
front-end can re-prompt. It never raises InvariantViolation: malformed user
input is expected, not a bug.
"""

from typing import Tuple

from .config import GameConfig, Score
from .pins import Combination


def validate_score(score: Tuple[int, int], config: GameConfig) -> bool:
    """Return True if `score` is an achievable (black, white) pair for `config`."""
    if not isinstance(score, tuple) or len(score) != 2:
        return False
    return score in config.all_scores


def parse_peg_count(text: str, config: GameConfig) -> int:
    """
    Parse one peg count typed by a human (e.g. the answer to "Black: ").

    Accepts surrounding whitespace; must be an integer in 0..P.
    """
    s = text.strip()
    try:
        n = int(s)
    except ValueError as e:
        raise ValueError(f"expected a whole number, got {s!r}") from e
    if not 0 <= n <= config.positions:
        raise ValueError(f"peg count must be between 0 and {config.positions}; got {n}")
    return n


def parse_score(black_text: str, white_text: str, config: GameConfig) -> Score:
    """Parse black/white counts and check the pair is achievable."""
    score = (parse_peg_count(black_text, config), parse_peg_count(white_text, config))
    if not validate_score(score, config):
        raise ValueError(f"{score} is not a possible score with {config.positions} positions")
    return score


def parse_combination(text: str, config: GameConfig) -> Combination:
    """
    Parse "2,5,0,7" (commas and/or spaces) into a Combination.

    Raises ValueError on wrong arity, non-integers or out-of-range colors.
    """
    parts = [p for p in text.replace(",", " ").split() if p]
    if len(parts) != config.positions:
        raise ValueError(f"expected {config.positions} colors, got {len(parts)}")
    try:
        values = [int(p) for p in parts]
    except ValueError as e:
        raise ValueError(f"colors must be whole numbers: {text!r}") from e
    for v in values:
        if not 0 <= v < config.colors:
            raise ValueError(f"color {v} is outside 0..{config.colors - 1}")
    return Combination.make(*values, config=config)
