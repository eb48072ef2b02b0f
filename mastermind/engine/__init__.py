from .config import GameConfig, DEFAULT_CONFIG, Score
from .pins import Combination, all_combinations
from .scoring import compute_score, matches_score, score_index, score_table, codes_of
from .constraints import filter_candidates, is_consistent
from .validation import validate_score, parse_score, parse_peg_count, parse_combination
from .errors import MastermindError, InvariantViolation, InvalidCombination, InconsistentFeedback

__all__ = [
    "GameConfig", "DEFAULT_CONFIG", "Score",
    "Combination", "all_combinations",
    "compute_score", "matches_score", "score_index", "score_table", "codes_of",
    "filter_candidates", "is_consistent",
    "validate_score", "parse_score", "parse_peg_count", "parse_combination",
    "MastermindError", "InvariantViolation", "InvalidCombination", "InconsistentFeedback",
]
