# rubric.py

from typing import Sequence

from pydantic import BaseModel, Field, ConfigDict, model_validator

# ─────────────────────────────────────────────────────────────────────────────
# Rubric
# ─────────────────────────────────────────────────────────────────────────────


class Rubric(BaseModel):
    """One scenario metric: inclusive score range and a non-negative weight."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1)
    scenario_id: str = Field(..., min_length=1)
    metric_name: str = Field(..., min_length=1)
    description: str = Field(default="")
    min_score: float = Field(default=0.0, ge=0.0)
    max_score: float = Field(..., gt=0.0)
    weight: float = Field(default=1.0, ge=0.0)

    @model_validator(mode="after")
    def _check_range(self) -> "Rubric":
        if self.min_score >= self.max_score:
            raise ValueError(
                f"min_score ({self.min_score:g}) must be lower than max_score ({self.max_score:g})"
            )
        return self


def total_weight(rubrics: Sequence[Rubric]) -> float:
    return sum(r.weight for r in rubrics)
