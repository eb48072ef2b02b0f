"""
Minimax (worst-case elimination) solver.

Idea:
  For every guess g in the WHOLE space (not only live candidates), imagine the
  adversary answering with whichever score rules out the fewest candidates.
  That count is g's worst-case elimination:
      worst_case_elimination(g) = min over scores s of |{m : score(g, m) != s}|
                                = |candidates| - (largest bucket when candidates are grouped by score)
  Pick the guess that maximizes it.

Tie-break:
  - first tied guess (canonical enumeration order) that is still a candidate,
    since that one can win outright;
  - otherwise the first tied guess. It cannot be the secret but still gives
    the best guaranteed split.

Cost:
  C**P guesses x |candidates| scores per call, the dominant cost of a game.
  The bucket counts come from one numpy score table per call instead of a
  Python loop per (guess, score, candidate).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, List

import numpy as np

from .base import BaseSolver, register
from mastermind.engine import (
    Combination, GameConfig, all_combinations, codes_of, compute_score, score_table,
    InvariantViolation,
)

logger = logging.getLogger(__name__)

# Guesses scored per numpy pass; bounds the size of the score table in memory.
GUESS_CHUNK = 512


@lru_cache(maxsize=None)
def _all_codes(config: GameConfig) -> np.ndarray:
    codes = codes_of(all_combinations(config))
    codes.setflags(write=False)
    return codes


def worst_case_elimination(guess: Combination, candidates: Iterable[Combination], config: GameConfig) -> int:
    """
    Straight per-score count: the fewest candidates `guess` is guaranteed to
    rule out. Reference for the vectorized path in MinMaxSolver.
    """
    candidates = list(candidates)
    worst = len(candidates)
    for possible_score in config.all_scores:
        eliminated = 0
        for m in candidates:
            if compute_score(guess, m) != possible_score:
                eliminated += 1
        if eliminated < worst:
            worst = eliminated
    return worst


def worst_case_eliminations(guess_codes: np.ndarray, candidate_codes: np.ndarray, config: GameConfig,
                            chunk: int = GUESS_CHUNK) -> np.ndarray:
    """Worst-case elimination for each of `guess_codes` against the candidate set."""
    n = len(candidate_codes)
    k = (config.positions + 1) ** 2
    out = np.empty(len(guess_codes), dtype=np.int64)
    for start in range(0, len(guess_codes), chunk):
        table = score_table(guess_codes[start:start + chunk], candidate_codes, config)
        rows = table.shape[0]
        # Histogram every row at once by giving each row its own block of k bins.
        flat = (table + (np.arange(rows, dtype=np.int64) * k)[:, None]).ravel()
        buckets = np.bincount(flat, minlength=rows * k).reshape(rows, k)
        out[start:start + rows] = n - buckets.max(axis=1)
    return out


@register
class MinMaxSolver(BaseSolver):
    id = "minimax"
    name = "Minimax (Worst-Case Elimination)"
    version = "1.0.0"

    def best_guesses(self) -> List[Combination]:
        """Every guess attaining the maximal worst-case elimination, in enumeration order."""
        combos = all_combinations(self.config)
        candidate_codes = codes_of(self.candidates)
        scores = worst_case_eliminations(_all_codes(self.config), candidate_codes, self.config)
        best = scores.max()
        return [combos[i] for i in np.flatnonzero(scores == best)]

    def next_guess(self) -> Combination:
        if not self.initialized:
            # Symmetry makes the best first guess the same every game.
            return self.opening_guess()

        if not self.candidates:
            raise InvariantViolation("next_guess called with an empty candidate set")

        if len(self.candidates) == 1:
            return next(iter(self.candidates))

        ties = self.best_guesses()

        for g in ties:
            if g in self.candidates:
                return g

        logger.info("Guessing a non-possible answer: %r", ties[0])
        return ties[0]
