from .core import (
    run_game, run_case, run_batch, summarize, random_secret, secret_scorer, DEFAULT_MAX_TURNS,
)
from .io import write_csv, write_manifest

__all__ = [
    "run_game", "run_case", "run_batch", "summarize", "random_secret", "secret_scorer",
    "DEFAULT_MAX_TURNS", "write_csv", "write_manifest",
]
