from __future__ import annotations

import logging
import random
from typing import Dict, Set, Type

from mastermind.engine import (
    DEFAULT_CONFIG, Combination, GameConfig, Score, all_combinations, filter_candidates,
    InconsistentFeedback, InvariantViolation,
)

logger = logging.getLogger(__name__)

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Base class that solvers inherit ----
class BaseSolver:
    """
    Per-game codebreaker state.

    Lifecycle of one game:
      Uninitialized --score_for_guess--> Narrowing --(harness sees a win)--> Solved

    Subclasses only decide `next_guess`; narrowing the candidate set is shared.
    """
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.config: GameConfig = DEFAULT_CONFIG
        self.candidates: Set[Combination] = set()
        self.initialized: bool = False
        self.rng = random.Random()

    def reset(self, *, config: GameConfig = DEFAULT_CONFIG, seed: int | None = None) -> None:
        self.config = config
        self.candidates = set()
        self.initialized = False
        if seed is not None:
            self.rng.seed(seed)

    def opening_guess(self) -> Combination:
        return Combination.opening(self.config)

    def next_guess(self) -> Combination:
        raise NotImplementedError("Override in subclass")

    def score_for_guess(self, guess: Combination, score: Score) -> None:
        """
        Narrow the candidate set with the score received for `guess`.

        The first call builds the set from the whole space (minus `guess`,
        which just failed to win); later calls only remove members.
        """
        if score == self.config.win_score:
            raise InvariantViolation(f"winning score {score} ends the game; nothing to narrow")
        if score not in self.config.all_scores:
            raise InvariantViolation(f"{score} is not an achievable score for {self.config}")

        if not self.initialized:
            self.initialized = True
            pool = (c for c in all_combinations(self.config) if c != guess)
            self.candidates = set(filter_candidates(pool, [(guess, score)]))
        else:
            if not self.candidates:
                raise InvariantViolation("score_for_guess called with no candidates left")
            self.candidates = set(filter_candidates(self.candidates, [(guess, score)]))

        logger.info("%d possible answers left", len(self.candidates))

        if not self.candidates:
            logger.error("No combination is consistent with the scores so far (last: %r -> %r)", guess, score)
            raise InconsistentFeedback(f"no candidates remain after {guess!r} scored {score}")
