# src/parley/scoring/scorer.py
from enum import Enum
from typing import Awaitable, Callable, Sequence

from parley.errors import GenerationError, MalformedResponseError, ParleyError
from parley.generation.protocol import GeneratorProtocol
from parley.generation.pydantic_ai import PydanticAIGenerator
from parley.logging import get_logger
from parley.models.request import ChatMessage
from parley.models.rubric import Rubric
from parley.models.scoring import ScoringResult
from parley.models.transcript import TranscriptEntry
from parley.prompt import build_evaluation_request
from parley.scoring.aggregate import aggregate, map_rubric_scores
from parley.scoring.parse import parse_response

logger = get_logger("scoring")

# Async progress callback contract (optional)
ProgressCallback = Callable[[str], Awaitable[None]]


class ScoringState(str, Enum):
    requesting = "Requesting"
    parsing_response = "ParsingResponse"
    validating = "Validating"
    aggregating = "Aggregating"
    done = "Done"
    failed = "Failed"


async def emit_progress(progress: ProgressCallback | None, line: str) -> None:
    """
    Best-effort progress emission. A failing callback never aborts scoring.
    """
    if progress is None:
        return
    try:
        await progress(line)
    except Exception:
        logger.debug("progress callback raised; ignoring", exc_info=True)


class Scorer:
    """Scores a finished transcript against weighted rubrics with one generation call.

    The scorer holds no per-call state, so a single instance can serve
    concurrent calls for different sessions.
    """

    def __init__(
        self,
        generator: GeneratorProtocol | None = None,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self._generator = generator if generator is not None else PydanticAIGenerator()
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def score(
        self,
        transcript: Sequence[TranscriptEntry],
        rubrics: Sequence[Rubric],
        *,
        progress: ProgressCallback | None = None,
    ) -> ScoringResult:
        # InvalidInputError surfaces from here, before any generation call.
        request = build_evaluation_request(
            transcript, rubrics, temperature=self._temperature, max_tokens=self._max_tokens
        )
        state = ScoringState.requesting
        try:
            await self._enter(state, progress)
            raw = await self._generate(request.messages, request.temperature, request.max_tokens)

            state = ScoringState.parsing_response
            await self._enter(state, progress)
            generated = parse_response(raw)

            state = ScoringState.validating
            await self._enter(state, progress)
            try:
                rubric_scores = map_rubric_scores(generated, rubrics)
            except MalformedResponseError as ex:
                if ex.raw_response is None:
                    ex.raw_response = raw
                raise

            state = ScoringState.aggregating
            await self._enter(state, progress)
            result = aggregate(rubric_scores, rubrics, generated)
        except ParleyError as ex:
            logger.info("scoring failed during %s: %s: %s", state.value, ex.kind, ex)
            await emit_progress(progress, f"parley: {ScoringState.failed.value} ({ex.kind})")
            raise

        await self._enter(ScoringState.done, progress)
        logger.info(
            "scored %d rubrics: %.1f%% (%s)",
            len(result.rubric_scores),
            result.percentage,
            result.performance_level.level,
        )
        return result

    async def _generate(
        self, messages: Sequence[ChatMessage], temperature: float, max_tokens: int
    ) -> str:
        try:
            raw = await self._generator.generate(
                messages, temperature=temperature, max_tokens=max_tokens
            )
        except GenerationError:
            raise
        except Exception as ex:
            raise GenerationError(f"generation call failed: {type(ex).__name__}: {ex}") from ex
        if not isinstance(raw, str):
            raise GenerationError(f"generator returned {type(raw).__name__}, expected str")
        return raw

    @staticmethod
    async def _enter(state: ScoringState, progress: ProgressCallback | None) -> None:
        logger.debug("scoring state -> %s", state.value)
        await emit_progress(progress, f"parley: {state.value}…")
