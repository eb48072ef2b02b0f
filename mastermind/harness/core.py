"""
Game harness core primitives.

- run_game:  play one game against any score source (simulated or human).
- run_case:  run_game against a known secret.
- run_batch: run many games with secrets drawn from an injected RNG.
- summarize: aggregate guess counts over a batch.

These functions are intentionally UI-agnostic so they can be reused by the
CLI app, a notebook, or tests without changes. Randomness always comes from a
`random.Random` passed in by the caller; nothing here touches the global RNG.
"""

from __future__ import annotations

import random
import time
from collections import Counter
from typing import Callable, Dict, List, Optional, Tuple

from mastermind.engine import DEFAULT_CONFIG, Combination, GameConfig, Score, compute_score

# Generous cap: minimax needs about 5 guesses for 4 positions x 8 colors.
DEFAULT_MAX_TURNS = 10

ScoreSource = Callable[[Combination], Score]
TurnObserver = Callable[[int, Combination, Score], None]


def _assert_turn_budget(max_turns: int) -> None:
    """Guardrail: a game needs at least one turn."""
    if max_turns < 1:
        raise ValueError(f"max_turns must be >= 1; got {max_turns}")


def random_secret(rng: random.Random, config: GameConfig = DEFAULT_CONFIG) -> Combination:
    """Uniformly random secret drawn from `rng`."""
    return Combination.make(*(rng.randrange(config.colors) for _ in range(config.positions)), config=config)


def secret_scorer(secret: Combination) -> ScoreSource:
    """Score source that plays codemaker for a known secret."""
    def _score(guess: Combination) -> Score:
        return compute_score(guess, secret)
    return _score


def run_game(
        solver,
        score_source: ScoreSource,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        max_turns: int = DEFAULT_MAX_TURNS,
        seed: int | None = None,
        on_turn: Optional[TurnObserver] = None,
        secret: Optional[Combination] = None,
) -> Dict:
    """
    Execute one game until a winning score or the turn budget runs out.

    Args:
        solver:        an object implementing BaseSolver
        score_source:  callable returning the (black, white) score of a guess
        config:        game configuration (positions, colors)
        max_turns:     turn budget (>= 1)
        seed:          RNG seed for solvers with random tie-breaks
        on_turn:       optional observer called as on_turn(turn, guess, score)
        secret:        recorded in the result when known (self-play)

    Returns:
        dict with keys:
            success (bool), guesses (int), time_ms (float),
            history (list[(guess, score)]), secret (Combination | None)
    """
    _assert_turn_budget(max_turns)

    solver.reset(config=config, seed=seed)
    history: List[Tuple[Combination, Score]] = []
    success = False

    t0 = time.perf_counter()
    for turn in range(1, max_turns + 1):
        guess = solver.next_guess()
        score = score_source(guess)
        history.append((guess, score))
        if on_turn is not None:
            on_turn(turn, guess, score)

        if score == config.win_score:
            success = True
            break

        solver.score_for_guess(guess, score)

    dt = (time.perf_counter() - t0) * 1000.0
    return {
        "success": success, "guesses": len(history), "time_ms": dt,
        "history": history, "secret": secret,
    }


def run_case(
        solver,
        secret: Combination,
        *,
        max_turns: int = DEFAULT_MAX_TURNS,
        seed: int | None = None,
        on_turn: Optional[TurnObserver] = None,
) -> Dict:
    """Play one game against a known secret (its configuration drives the game)."""
    return run_game(
        solver, secret_scorer(secret), config=secret.config, max_turns=max_turns,
        seed=seed, on_turn=on_turn, secret=secret,
    )


def run_batch(
        solver,
        count: int,
        *,
        rng: random.Random,
        config: GameConfig = DEFAULT_CONFIG,
        max_turns: int = DEFAULT_MAX_TURNS,
        seed: int | None = None,
        on_turn: Optional[TurnObserver] = None,
) -> List[Dict]:
    """
    Run `count` independent games back-to-back with secrets drawn from `rng`.

    Each case's seed is derived from the base seed to make runs reproducible
    but not identical across cases (seed + index).
    """
    _assert_turn_budget(max_turns)

    out: List[Dict] = []
    for idx in range(1, count + 1):
        secret = random_secret(rng, config)
        case_seed = None if seed is None else (seed + idx)
        out.append(run_case(solver, secret, max_turns=max_turns, seed=case_seed, on_turn=on_turn))
    return out


def summarize(results: List[Dict]) -> Dict:
    """Games, wins, mean/max guesses over wins, and the guess-count distribution."""
    wins = [r["guesses"] for r in results if r["success"]]
    return {
        "games": len(results),
        "wins": len(wins),
        "mean_guesses": (sum(wins) / len(wins)) if wins else 0.0,
        "max_guesses": max(wins) if wins else 0,
        "distribution": dict(sorted(Counter(wins).items())),
    }
