"""Shape of the JSON payload expected back from the generation call.

These models are lenient on purpose: unknown keys are ignored and optional
narrative fields may be absent. The numeric ``score`` is the only thing that
must be present and finite for every entry.
"""

from typing import Any

from pydantic import BaseModel, Field, ConfigDict, field_validator


def _as_text_list(v: Any) -> Any:
    if v is None:
        return None
    if isinstance(v, str):
        return [v] if v.strip() else []
    if isinstance(v, (list, tuple)):
        return [item if isinstance(item, str) else str(item) for item in v if item is not None]
    return v


class GeneratedRubricScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rubric_id: str | int | None = None
    metric_name: str | None = None
    score: float = Field(..., allow_inf_nan=False)
    feedback: str | None = None
    evidence: list[str] | None = None

    @field_validator("evidence", mode="before")
    @classmethod
    def _coerce_evidence(cls, v: Any) -> Any:
        return _as_text_list(v)


class GeneratedEvaluation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rubric_scores: list[GeneratedRubricScore]
    overall_feedback: str | None = None
    strengths: list[str] | None = None
    areas_for_improvement: list[str] | None = None

    @field_validator("strengths", "areas_for_improvement", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> Any:
        return _as_text_list(v)
