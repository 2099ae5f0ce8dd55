"""Evaluation request rendering.

The rubric list is enumerated in the order it was given. The response is
mapped back onto rubrics by position, so this order must never change.
"""

from __future__ import annotations

from typing import Sequence

from parley.errors import InvalidInputError
from parley.models.request import ChatMessage, EvaluationRequest
from parley.models.rubric import Rubric, total_weight
from parley.models.transcript import TranscriptEntry
from parley.settings import get_settings

EVALUATOR_SYSTEM_PROMPT = (
    "You are an expert training evaluator. Analyze conversations and provide detailed, "
    "constructive feedback based on specific rubrics. Be fair, objective, and provide "
    "actionable insights. Always respond with valid JSON."
)

RESPONSE_FORMAT = """{
  "rubric_scores": [
    {
      "rubric_id": "rubric_id_here",
      "metric_name": "metric_name_here",
      "score": number,
      "feedback": "detailed feedback here",
      "evidence": ["quote 1", "quote 2"]
    }
  ],
  "overall_feedback": "overall feedback here",
  "strengths": ["strength 1", "strength 2"],
  "areas_for_improvement": ["area 1", "area 2"]
}"""


def validate_rubrics(rubrics: Sequence[Rubric]) -> None:
    """Reject rubric sets that cannot produce a bounded percentage."""
    if not rubrics:
        raise InvalidInputError("No rubrics provided for scoring")
    if total_weight(rubrics) <= 0:
        raise InvalidInputError("Total rubric weight must be greater than zero")


def render_transcript(transcript: Sequence[TranscriptEntry]) -> str:
    if not transcript:
        return "(no messages were exchanged)"
    return "\n\n".join(f"{entry.speaker_label}: {entry.content}" for entry in transcript)


def render_rubrics(rubrics: Sequence[Rubric]) -> str:
    blocks = []
    for position, rubric in enumerate(rubrics, start=1):
        blocks.append(
            f"{position}. {rubric.metric_name}\n"
            f"   Rubric ID: {rubric.id}\n"
            f"   Description: {rubric.description or '(none)'}\n"
            f"   Score Range: {rubric.min_score:g} to {rubric.max_score:g}\n"
            f"   Weight: {rubric.weight:g}"
        )
    return "\n\n".join(blocks)


def token_budget(rubric_count: int) -> int:
    """Output tokens for one scoring call, growing with the number of rubrics."""
    settings = get_settings()
    return max(settings.scoring_max_tokens, settings.scoring_tokens_per_rubric * rubric_count + 500)


def build_user_prompt(transcript: Sequence[TranscriptEntry], rubrics: Sequence[Rubric]) -> str:
    return f"""Analyze the following conversation transcript and score the trainee's performance based on the provided rubrics.

CONVERSATION TRANSCRIPT:
{render_transcript(transcript)}

RUBRICS TO EVALUATE:
{render_rubrics(rubrics)}

INSTRUCTIONS:
For each rubric, in the order listed above, provide:
1. A score within the specified range
2. Specific feedback explaining the score
3. Evidence from the conversation (verbatim quotes; use an empty list if there are none)

Also provide:
- Overall feedback on the trainee's performance
- 2-3 key strengths demonstrated
- 2-3 areas for improvement

Return exactly {len(rubrics)} entries in "rubric_scores", one per rubric, in the same order, echoing each rubric's ID.

Respond in the following JSON format:
{RESPONSE_FORMAT}"""


def build_evaluation_request(
    transcript: Sequence[TranscriptEntry],
    rubrics: Sequence[Rubric],
    *,
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> EvaluationRequest:
    """Render the system + user messages for scoring ``transcript`` against ``rubrics``."""
    validate_rubrics(rubrics)
    settings = get_settings()
    return EvaluationRequest(
        messages=[
            ChatMessage(role="system", content=EVALUATOR_SYSTEM_PROMPT),
            ChatMessage(role="user", content=build_user_prompt(transcript, rubrics)),
        ],
        temperature=settings.scoring_temperature if temperature is None else temperature,
        max_tokens=max_tokens or token_budget(len(rubrics)),
    )
