"""
I/O utilities for experiment runs.

Responsibilities:
- write_csv:     flatten per-game results into a tidy CSV (one row per game).
- write_manifest:dump a JSON manifest with config and metadata.
- timestamp_id:  stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Combinations are written as space-separated colors ("2 5 0 7") and scores
  as "black/white" ("1/2"), so spreadsheet apps keep them as text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional
import csv
import datetime as dt
import json
import subprocess

from mastermind.engine import Combination, Score


def format_combination(c: Optional[Combination]) -> str:
    return "" if c is None else " ".join(str(v) for v in c.values())


def format_score(s: Score) -> str:
    return f"{s[0]}/{s[1]}"


def write_csv(results: List[Dict], path: str, max_turns: int) -> str:
    """
    Serialize a batch of game results to CSV.

    Schema (columns):
      solver, positions, colors, secret, success, guesses, time_ms,
      guess_1, score_1, ..., guess_max_turns, score_max_turns

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fields = ["solver", "positions", "colors", "secret", "success", "guesses", "time_ms"]
    for i in range(1, max_turns + 1):
        fields += [f"guess_{i}", f"score_{i}"]

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()

        for r in results:
            hist = r.get("history", [])
            cfg = hist[0][0].config if hist else None
            row = {
                "solver": r.get("solver_id", "?"),
                "positions": cfg.positions if cfg else "",
                "colors": cfg.colors if cfg else "",
                "secret": format_combination(r.get("secret")),
                "success": r["success"],
                "guesses": r["guesses"],
                "time_ms": round(float(r["time_ms"]), 3),
            }

            # Expand history into fixed columns
            for i in range(1, max_turns + 1):
                if i <= len(hist):
                    g, s = hist[i - 1]
                    row[f"guess_{i}"] = format_combination(g)
                    row[f"score_{i}"] = format_score(s)
                else:
                    row[f"guess_{i}"] = ""
                    row[f"score_{i}"] = ""

            w.writerow(row)

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (solver, positions, colors, count, seed, outdir)
      - summary: output of harness.summarize(...)
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
