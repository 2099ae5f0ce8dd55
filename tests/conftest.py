import json
from typing import Any, Callable

import pytest

from parley.models.rubric import Rubric
from parley.models.transcript import TranscriptEntry


@pytest.fixture
def make_rubric() -> Callable[..., Rubric]:
    def _make(
        rubric_id: str = "r1",
        *,
        metric_name: str | None = None,
        min_score: float = 0,
        max_score: float = 10,
        weight: float = 1.0,
        description: str = "How well the trainee did",
    ) -> Rubric:
        return Rubric(
            id=rubric_id,
            scenario_id="scenario-1",
            metric_name=metric_name or f"Metric {rubric_id}",
            description=description,
            min_score=min_score,
            max_score=max_score,
            weight=weight,
        )

    return _make


@pytest.fixture
def transcript() -> list[TranscriptEntry]:
    return [
        TranscriptEntry(role="trainee", content="Hi, thanks for calling. How can I help?"),
        TranscriptEntry(role="persona", content="My order never arrived and I'm upset."),
        TranscriptEntry(role="trainee", content="I'm sorry to hear that, let me check it for you."),
    ]


def response_json(scores: list[float], **extra: Any) -> str:
    """Build a well-formed generator reply for the given scores."""
    payload = {
        "rubric_scores": [
            {"score": s, "feedback": f"feedback {i}", "evidence": [f"quote {i}"]}
            for i, s in enumerate(scores, start=1)
        ],
        "overall_feedback": "Solid call overall.",
        "strengths": ["Empathy", "Clear next steps"],
        "areas_for_improvement": ["Confirm the order number earlier"],
    }
    payload.update(extra)
    return json.dumps(payload)


@pytest.fixture
def reply_for() -> Callable[..., str]:
    return response_json
