"""
Random Consistent solver.

Strategy:
  - Open with the canonical opening guess, like every solver.
  - Afterwards choose uniformly at random from the CURRENT candidate set
    (combinations still consistent with all feedback so far).

Notes:
  - Deterministic across runs with the same seed (via BaseSolver.rng): the
    draw is made from the candidates in enumeration order, not set order.
  - This is a baseline for the harness; it does not try to maximize the
    guaranteed split like the minimax solver.
"""

from __future__ import annotations

from typing import List

from .base import BaseSolver, register
from mastermind.engine import Combination, InvariantViolation


@register
class RandomConsistentSolver(BaseSolver):
    id = "random_consistent"
    name = "Random Consistent"
    version = "1.0.0"

    def next_guess(self) -> Combination:
        if not self.initialized:
            return self.opening_guess()

        pool: List[Combination] = sorted(self.candidates, key=lambda c: c.value)
        if not pool:
            raise InvariantViolation("next_guess called with an empty candidate set")

        return pool[self.rng.randrange(len(pool))]
