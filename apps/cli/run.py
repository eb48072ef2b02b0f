# apps/cli/run.py
"""
CLI entry point for playing Mastermind as the codebreaker.

This script:
  1) Builds the game configuration (positions x colors) and the requested solver.
  2) Plays one or more games, either against random secrets (self-play) or
     reading each score from a human at the terminal (--interactive).
  3) Prints every guess and score, then a summary; optionally writes:
       - CSV:  per-game results + guess/score history columns
       - JSON: manifest with config, summary, git commit, etc.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Dict, List

# Optional rich progress bar
try:
    from tqdm import tqdm  # pip install tqdm
    _HAS_TQDM = True
except ImportError:
    _HAS_TQDM = False

from mastermind.engine import GameConfig, Combination, Score, InconsistentFeedback, parse_score, parse_combination
from mastermind.harness import run_game, run_case, summarize, random_secret, DEFAULT_MAX_TURNS
from mastermind.harness.io import write_csv, write_manifest, timestamp_id, git_commit_or_unknown
from mastermind.solvers import create_solver, get_solver_ids

# Seed used by --const-seed unless --seed says otherwise.
CONST_SEED = 0


class _QuitGame(Exception):
    """Raised when stdin closes in the middle of an interactive game."""


def read_score_interactively(config: GameConfig) -> Score:
    """
    Prompt for black and white peg counts until they form a possible score.
    Malformed input is reported and re-prompted; EOF ends the game.
    """
    while True:
        try:
            black = input("Black: ")
            white = input("White: ")
        except EOFError:
            raise _QuitGame() from None
        try:
            return parse_score(black, white, config)
        except ValueError as e:
            print(f"Invalid score: {e}. Try again.")


def _print_turn(turn: int, guess: Combination, score: Score) -> None:
    print(f"Guess: {guess!r}")
    print(f"Score: {score}")


def _interactive_score_source(config: GameConfig):
    def _score(guess: Combination) -> Score:
        print(f"Guess: {guess!r}")
        return read_score_interactively(config)
    return _score


def main(argv: List[str] | None = None) -> int:
    """
    Parse CLI args, play the requested games, and write outputs.
    """
    solver_choices = ", ".join(get_solver_ids())

    ap = argparse.ArgumentParser(description="mastermindAI: minimax Mastermind codebreaker")
    ap.add_argument("--interactive", action="store_true", help="read scores from stdin")
    ap.add_argument("-c", "--count", type=int, default=1, help="how many times to run the algorithm")
    ap.add_argument("--const-seed", action="store_true",
                    help="use a constant RNG seed (vs. OS entropy)")
    ap.add_argument("--seed", type=int, default=CONST_SEED, help="seed used with --const-seed")
    ap.add_argument("--solver", default="minimax", help=f"solver id (one of: {solver_choices})")
    ap.add_argument("--positions", type=int, default=4, help="pegs per combination")
    ap.add_argument("--colors", type=int, default=8, help="number of distinct colors")
    ap.add_argument("--secret", help="play against this secret, e.g. 2,5,0,7 (self-play only)")
    ap.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS, help="guess budget per game")
    ap.add_argument("--outdir", help="write CSV + manifest to this directory")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="Show run progress (auto=bar for batches if tqdm available, else plain transcript)."
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="log engine diagnostics")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(message)s")

    # 1) Game configuration and solver (fail fast on bad values)
    try:
        config = GameConfig(positions=args.positions, colors=args.colors)
        solver = create_solver(args.solver)
        fixed_secret = parse_combination(args.secret, config) if args.secret else None
    except ValueError as e:
        ap.error(str(e))

    results: List[Dict] = []

    # 2) Interactive: a human holds the secret and types each score
    if args.interactive:
        for _ in range(args.count):
            try:
                r = run_game(solver, _interactive_score_source(config), config=config,
                             max_turns=args.max_turns)
            except InconsistentFeedback as e:
                print(f"Error: the scores entered are inconsistent ({e})", file=sys.stderr)
                return 1
            except _QuitGame:
                print("bye!")
                return 0
            r["solver_id"] = solver.id
            results.append(r)
            _print_result(r)
    else:
        # 3) Self-play against random secrets drawn from an explicit RNG
        rng = random.Random(args.seed) if args.const_seed else random.Random()

        mode = args.progress
        if mode == "auto":
            mode = "bar" if (_HAS_TQDM and args.count > 1 and sys.stderr.isatty()) else "plain"
        if mode == "bar" and not _HAS_TQDM:
            mode = "plain"

        games = range(args.count)
        iterator = tqdm(games, ncols=80, desc="Running", unit="game") if mode == "bar" else games
        on_turn = _print_turn if mode == "plain" else None

        for _ in iterator:
            secret = fixed_secret or random_secret(rng, config)
            r = run_case(solver, secret, max_turns=args.max_turns, on_turn=on_turn)
            r["solver_id"] = solver.id
            results.append(r)
            if mode == "plain":
                _print_result(r)

    summary = summarize(results)
    if len(results) > 1:
        print(f"{summary['wins']}/{summary['games']} won | mean {summary['mean_guesses']:.3f} "
              f"| max {summary['max_guesses']} | {summary['distribution']}")

    # 4) Write outputs (CSV + manifest)
    if args.outdir:
        run_id = timestamp_id()
        outdir = Path(args.outdir)
        outdir.mkdir(parents=True, exist_ok=True)

        csv_path = outdir / f"run_{run_id}.csv"
        manifest_path = outdir / f"run_{run_id}_manifest.json"

        write_csv(results, str(csv_path), max_turns=args.max_turns)
        manifest = {
            "run_id": run_id,
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "summary": summary,
            "solver_id": solver.id,
        }
        write_manifest(manifest, str(manifest_path))

        print(f"Wrote: {csv_path}")
        print(f"Wrote: {manifest_path}")

    return 0


def _print_result(r: Dict) -> None:
    if r["success"]:
        print(f"win in {r['guesses']}!")
    else:
        print(f"no win after {r['guesses']} guesses")


if __name__ == "__main__":
    sys.exit(main())
