"""Structured exception hierarchy for Parley.

Callers of the scoring engine need to tell three situations apart without
pattern-matching arbitrary exceptions raised by dependencies (pydantic,
pydantic_ai, provider SDKs, json):

  - InvalidInputError: the request was rejected before any generation call
    (no rubrics, zero total weight, malformed records).
  - GenerationError: the text-generation collaborator failed (transport,
    auth, rate limit, deadline). The caller may offer a retry.
  - MalformedResponseError: the collaborator answered but the text could not
    be turned into a complete set of rubric scores.

Each class exposes a stable ``kind`` string for callers that serialize errors.
"""

from __future__ import annotations

from typing import ClassVar

__all__ = [
    "ParleyError",
    "InvalidInputError",
    "GenerationError",
    "MalformedResponseError",
]


class ParleyError(RuntimeError):
    """Base class for all structured Parley errors."""

    kind: ClassVar[str] = "ParleyError"


class InvalidInputError(ParleyError):
    """Raised when transcript or rubric input cannot be scored."""

    kind: ClassVar[str] = "InvalidInput"


class GenerationError(ParleyError):
    """Raised when the text-generation call fails or exceeds its deadline."""

    kind: ClassVar[str] = "GenerationError"


class MalformedResponseError(ParleyError):
    """Raised when the generated text is not a usable evaluation payload.

    ``raw_response`` keeps the original text so callers can log or report it.
    """

    kind: ClassVar[str] = "MalformedResponse"

    def __init__(self, message: str, *, raw_response: str | None = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response
