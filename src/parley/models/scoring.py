from pydantic import BaseModel, Field, ConfigDict

from parley.models.performance import PerformanceLevel, get_performance_level

# ─────────────────────────────────────────────────────────────────────────────
# Scoring output (value objects owned by the call that produced them)
# ─────────────────────────────────────────────────────────────────────────────


class RubricScore(BaseModel):
    """Score for one rubric, already clamped into the rubric's range."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rubric_id: str
    metric_name: str
    score: float
    max_score: float = Field(..., gt=0.0)
    weight: float = Field(..., ge=0.0)
    feedback: str
    evidence: list[str] = Field(default_factory=list)

    @property
    def weighted_score(self) -> float:
        """Fraction of the range reached, scaled by the rubric weight."""
        return (self.score / self.max_score) * self.weight

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"RubricScore({self.metric_name}: {self.score:g}/{self.max_score:g}, w={self.weight:g})"


class ScoringResult(BaseModel):
    """
    Weighted evaluation of one conversation.

    `rubric_scores` follows the order of the rubrics that were scored.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rubric_scores: list[RubricScore] = Field(..., min_length=1)
    total_score: float = Field(..., ge=0.0)
    max_total_score: float = Field(..., gt=0.0)
    percentage: float = Field(..., ge=0.0, le=100.0)
    overall_feedback: str
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)

    @property
    def performance_level(self) -> PerformanceLevel:
        return get_performance_level(self.percentage)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return (
            f"ScoringResult(percentage={self.percentage}, level={self.performance_level.level}, "
            f"rubrics={len(self.rubric_scores)})"
        )

    def __repr__(self) -> str:  # pragma: no cover - trivial
        scores = [(s.metric_name, s.score) for s in self.rubric_scores]
        return (
            f"ScoringResult(total_score={self.total_score:.3f}, max_total_score={self.max_total_score:g}, "
            f"percentage={self.percentage}, scores={scores})"
        )
