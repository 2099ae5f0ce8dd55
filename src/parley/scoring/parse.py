import json
import re

from pydantic import ValidationError

from parley.errors import MalformedResponseError
from parley.logging import get_logger
from parley.models.response import GeneratedEvaluation

logger = get_logger("scoring")

_FENCED_BLOCK = re.compile(r"```[A-Za-z]*[ \t]*\n?(.*?)\n?[ \t]*```", re.DOTALL)
_LOG_SNIPPET_CHARS = 500


def strip_code_fences(text: str) -> str:
    """Return the body of the first fenced code block, or the trimmed text if there is none."""
    s = text.strip()
    m = _FENCED_BLOCK.search(s)
    if m:
        return m.group(1).strip()
    if s.startswith("```"):
        # opening fence without a closing one (truncated reply)
        s = s.split("\n", 1)[1] if "\n" in s else ""
    return s.strip()


def _malformed(message: str, raw: str) -> MalformedResponseError:
    logger.warning("%s; raw response: %r", message, raw[:_LOG_SNIPPET_CHARS])
    return MalformedResponseError(message, raw_response=raw)


def parse_response(raw: str) -> GeneratedEvaluation:
    """Parse generated text into a `GeneratedEvaluation`.

    Raises MalformedResponseError when the text is empty, is not strict JSON,
    is not a JSON object, or lacks a well-formed ``rubric_scores`` array.
    """
    cleaned = strip_code_fences(raw or "")
    if not cleaned:
        raise _malformed("Scoring response was empty", raw or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as ex:
        raise _malformed(f"Scoring response is not valid JSON: {ex.msg}", raw) from ex
    if not isinstance(data, dict):
        raise _malformed(
            f"Scoring response must be a JSON object, got {type(data).__name__}", raw
        )
    try:
        return GeneratedEvaluation.model_validate(data)
    except ValidationError as ex:
        raise _malformed(
            f"Scoring response does not match the expected shape ({ex.error_count()} errors)", raw
        ) from ex
