"""Public entry points for scoring a finished conversation.

Plain mappings (rows loaded from storage, JSON request bodies) are accepted
for the transcript and the rubrics. They are validated into models before any
generation call is made, and unknown columns are dropped.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from parley.errors import GenerationError, InvalidInputError
from parley.generation.protocol import GeneratorProtocol
from parley.logging import get_logger
from parley.models.rubric import Rubric
from parley.models.scoring import ScoringResult
from parley.models.transcript import TranscriptEntry
from parley.scoring.scorer import ProgressCallback, Scorer

logger = get_logger()

TranscriptLike = Sequence[TranscriptEntry | Mapping[str, Any]]
RubricsLike = Sequence[Rubric | Mapping[str, Any]]


def _coerce_transcript(transcript: TranscriptLike) -> list[TranscriptEntry]:
    try:
        return [
            e if isinstance(e, TranscriptEntry) else TranscriptEntry.model_validate(e)
            for e in transcript
        ]
    except ValidationError as ex:
        raise InvalidInputError(f"Invalid transcript entry: {ex}") from ex


def _coerce_rubrics(rubrics: RubricsLike) -> list[Rubric]:
    try:
        return [r if isinstance(r, Rubric) else Rubric.model_validate(r) for r in rubrics]
    except ValidationError as ex:
        raise InvalidInputError(f"Invalid rubric: {ex}") from ex


async def score_conversation_async(
    transcript: TranscriptLike,
    rubrics: RubricsLike,
    *,
    generator: GeneratorProtocol | None = None,
    progress: ProgressCallback | None = None,
    timeout_s: float | None = None,
) -> ScoringResult:
    """Score a finished conversation against the scenario's rubrics.

    Entries and rubrics may be model instances or plain mappings (e.g. rows
    fetched from the database). ``timeout_s`` is an optional outer deadline;
    when it expires the call fails with GenerationError.

    Raises InvalidInputError, GenerationError or MalformedResponseError. No
    fallback result is ever produced.
    """
    entries = _coerce_transcript(transcript)
    rubric_list = _coerce_rubrics(rubrics)
    scorer = Scorer(generator)
    if timeout_s is None:
        return await scorer.score(entries, rubric_list, progress=progress)
    try:
        return await asyncio.wait_for(
            scorer.score(entries, rubric_list, progress=progress), timeout=timeout_s
        )
    except asyncio.TimeoutError as ex:
        logger.warning("scoring exceeded deadline of %ss", timeout_s)
        raise GenerationError(f"scoring timed out after {timeout_s}s") from ex


def score_conversation(
    transcript: TranscriptLike,
    rubrics: RubricsLike,
    *,
    generator: GeneratorProtocol | None = None,
    progress: ProgressCallback | None = None,
    timeout_s: float | None = None,
) -> ScoringResult:
    """Synchronous wrapper around `score_conversation_async`."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None
    if loop and loop.is_running():
        raise RuntimeError(
            "An asyncio event loop is running. Use `await score_conversation_async(...)` in async contexts."
        )
    return asyncio.run(
        score_conversation_async(
            transcript,
            rubrics,
            generator=generator,
            progress=progress,
            timeout_s=timeout_s,
        )
    )
