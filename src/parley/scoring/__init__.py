from parley.scoring.aggregate import aggregate, clamp_score, map_rubric_scores, round_percentage
from parley.scoring.parse import parse_response, strip_code_fences
from parley.scoring.scorer import ProgressCallback, Scorer, ScoringState

__all__ = [
    "ProgressCallback",
    "Scorer",
    "ScoringState",
    "aggregate",
    "clamp_score",
    "map_rubric_scores",
    "parse_response",
    "round_percentage",
    "strip_code_fences",
]
