"""
Mastermind scoring (feedback) for a (guess, secret) pair.

Conventions:
  - black : a peg with the right color in the right position
  - white : a peg with a right color in the wrong position
  - a score is the tuple (black, white)

Algorithm (per pair):
  1) Walk the positions. Equal colors count as black; otherwise tally the
     leftover color on each side.
  2) white = sum over colors of min(attempt_tally[c], reference_tally[c]).

`score_table` is the same computation vectorized with numpy for whole arrays
of packed codes at once. The minimax solver calls it in its inner loop; the
per-pair functions are the reference it is tested against.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .config import GameConfig, Score
from .pins import Combination

# Upper bound on guesses x references x colors handled per numpy chunk.
CHUNK_ELEMENTS = 1 << 22


def _tally(attempt: Combination, reference: Combination):
    cfg = attempt.config
    att_counts = [0] * cfg.colors
    ref_counts = [0] * cfg.colors
    black = 0
    for i in range(cfg.positions):
        a = attempt.get(i)
        r = reference.get(i)
        if a == r:
            black += 1
        else:
            att_counts[a] += 1
            ref_counts[r] += 1
    return black, att_counts, ref_counts


def compute_score(attempt: Combination, reference: Combination) -> Score:
    """
    Score `attempt` against `reference`.

    Examples (P=4):
      compute_score((0,1,2,3), (0,1,2,3)) -> (4, 0)
      compute_score((0,1,2,3), (1,2,3,0)) -> (0, 4)
      compute_score((0,1,2,3), (0,3,2,1)) -> (2, 2)
    """
    assert attempt.config == reference.config, "Combinations must share a configuration"
    black, att_counts, ref_counts = _tally(attempt, reference)
    white = 0
    for a, r in zip(att_counts, ref_counts):
        white += a if a < r else r
    return black, white


def matches_score(attempt: Combination, reference: Combination, score: Score) -> bool:
    """Same answer as `compute_score(attempt, reference) == score`, skipping the white count when black differs."""
    assert attempt.config == reference.config, "Combinations must share a configuration"
    black, att_counts, ref_counts = _tally(attempt, reference)
    if black != score[0]:
        return False
    white = 0
    for a, r in zip(att_counts, ref_counts):
        white += a if a < r else r
    return white == score[1]


def score_index(score: Score, config: GameConfig) -> int:
    """Dense id for a score: black * (P + 1) + white."""
    return score[0] * (config.positions + 1) + score[1]


def codes_of(combos: Iterable[Combination]) -> np.ndarray:
    """Packed values of `combos` as an int64 array (order preserved)."""
    return np.fromiter((c.value for c in combos), dtype=np.int64)


def _digits(codes: np.ndarray, config: GameConfig) -> np.ndarray:
    """(n,) packed codes -> (n, P) color per position."""
    shifts = np.arange(config.positions, dtype=np.int64) * config.bits_per_position
    return (codes[:, None] >> shifts) & config.mask


def _color_counts(digits: np.ndarray, config: GameConfig) -> np.ndarray:
    """(n, P) colors -> (n, C) number of pegs of each color."""
    colors = np.arange(config.colors, dtype=np.int64)
    return (digits[:, :, None] == colors).sum(axis=1, dtype=np.int32)


def score_table(guess_codes: np.ndarray, reference_codes: np.ndarray, config: GameConfig) -> np.ndarray:
    """
    Score index (see `score_index`) for every (guess, reference) pair.

    Returns an int64 array of shape (len(guess_codes), len(reference_codes)).

    Uses the multiset identity
        sum_c min(count_guess[c], count_ref[c]) == black + white
    so white falls out of the full color counts without the per-pair leftover
    tallies.
    """
    guess_codes = np.asarray(guess_codes, dtype=np.int64)
    reference_codes = np.asarray(reference_codes, dtype=np.int64)

    ref_digits = _digits(reference_codes, config)
    ref_counts = _color_counts(ref_digits, config)
    out = np.empty((len(guess_codes), len(reference_codes)), dtype=np.int64)
    if out.size == 0:
        return out

    per_row = max(1, len(reference_codes) * max(config.colors, config.positions))
    step = max(1, CHUNK_ELEMENTS // per_row)
    width = config.positions + 1

    for start in range(0, len(guess_codes), step):
        g_digits = _digits(guess_codes[start:start + step], config)
        g_counts = _color_counts(g_digits, config)

        black = (g_digits[:, None, :] == ref_digits[None, :, :]).sum(axis=2, dtype=np.int64)
        total = np.minimum(g_counts[:, None, :], ref_counts[None, :, :]).sum(axis=2, dtype=np.int64)
        out[start:start + step] = black * width + (total - black)

    return out
