"""
Candidate filtering given game history.

Given:
  - a pool of combinations (often the whole C**P space)
  - a history of (guess, score) pairs

Return:
  - combinations that are consistent with ALL feedback seen so far.

This is the step that turns feedback into a shrinking candidate set.
"""

from typing import Iterable, List, Tuple

from .config import Score
from .pins import Combination
from .scoring import matches_score

# History is a sequence of (guess, score) tuples produced by the harness.
History = Iterable[Tuple[Combination, Score]]


def is_consistent(candidate: Combination, history: History) -> bool:
    """True if `candidate`, taken as the secret, would reproduce every recorded score."""
    for guess, score in history:
        if not matches_score(guess, candidate, score):
            return False
    return True


def filter_candidates(combos: Iterable[Combination], history: History) -> List[Combination]:
    """
    Keep only combinations that would produce exactly the recorded score for
    every (guess, score) in `history`.

    Returns:
      List of consistent candidates (order preserved as in `combos`).
    """
    history = list(history)
    return [c for c in combos if is_consistent(c, history)]
