from parley.models.performance import PerformanceLevel, get_performance_level
from parley.models.request import ChatMessage, EvaluationRequest
from parley.models.rubric import Rubric, total_weight
from parley.models.scoring import RubricScore, ScoringResult
from parley.models.transcript import Speaker, TranscriptEntry

__all__ = [
    "ChatMessage",
    "EvaluationRequest",
    "PerformanceLevel",
    "Rubric",
    "RubricScore",
    "ScoringResult",
    "Speaker",
    "TranscriptEntry",
    "get_performance_level",
    "total_weight",
]
