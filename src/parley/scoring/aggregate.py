import math
from typing import Sequence

from parley.errors import InvalidInputError, MalformedResponseError
from parley.logging import get_logger
from parley.models.response import GeneratedEvaluation
from parley.models.rubric import Rubric, total_weight
from parley.models.scoring import RubricScore, ScoringResult

logger = get_logger("scoring")

NO_FEEDBACK = "No feedback provided"
NO_OVERALL_FEEDBACK = "No overall feedback provided."


def clamp_score(score: float, rubric: Rubric) -> float:
    """Force a reported score into the rubric's inclusive range."""
    return min(max(score, rubric.min_score), rubric.max_score)


def round_percentage(value: float) -> float:
    """Round half-up to one decimal place (86.65 -> 86.7)."""
    return math.floor(value * 10 + 0.5) / 10


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def map_rubric_scores(
    generated: GeneratedEvaluation, rubrics: Sequence[Rubric]
) -> list[RubricScore]:
    """Pair the generated entries with rubrics by position and clamp their scores.

    Identity comes from the input rubric at the same position; ids echoed by the
    generator are only checked for consistency.
    """
    if len(generated.rubric_scores) != len(rubrics):
        raise MalformedResponseError(
            f"Expected {len(rubrics)} rubric scores, got {len(generated.rubric_scores)}"
        )
    scores: list[RubricScore] = []
    for position, (rubric, entry) in enumerate(zip(rubrics, generated.rubric_scores), start=1):
        if entry.rubric_id is not None and str(entry.rubric_id) != rubric.id:
            logger.warning(
                "rubric %d: response echoed id %r but position maps to %r; using position",
                position,
                entry.rubric_id,
                rubric.id,
            )
        clamped = clamp_score(entry.score, rubric)
        if clamped != entry.score:
            logger.info(
                "rubric %d (%s): clamped score %g into [%g, %g]",
                position,
                rubric.metric_name,
                entry.score,
                rubric.min_score,
                rubric.max_score,
            )
        scores.append(
            RubricScore(
                rubric_id=rubric.id,
                metric_name=rubric.metric_name,
                score=clamped,
                max_score=rubric.max_score,
                weight=rubric.weight,
                feedback=entry.feedback if _has_text(entry.feedback) else NO_FEEDBACK,
                evidence=list(entry.evidence or []),
            )
        )
    return scores


def aggregate(
    rubric_scores: Sequence[RubricScore],
    rubrics: Sequence[Rubric],
    generated: GeneratedEvaluation,
) -> ScoringResult:
    """Combine per-rubric scores into the weighted total and percentage.

    The denominator is the sum of rubric weights, so rubrics with different
    score ranges contribute in proportion to their weight only.
    """
    max_total = total_weight(rubrics)
    if max_total <= 0:
        raise InvalidInputError("Total rubric weight must be greater than zero")
    total = sum(s.weighted_score for s in rubric_scores)
    return ScoringResult(
        rubric_scores=list(rubric_scores),
        total_score=total,
        max_total_score=max_total,
        percentage=round_percentage(total / max_total * 100),
        overall_feedback=(
            generated.overall_feedback
            if _has_text(generated.overall_feedback)
            else NO_OVERALL_FEEDBACK
        ),
        strengths=list(generated.strengths or []),
        areas_for_improvement=list(generated.areas_for_improvement or []),
    )
