"""Parley conversation scoring engine.

Scores finished roleplay training conversations against weighted rubrics
using a single LLM evaluation call.
"""

from __future__ import annotations

from .errors import (
    ParleyError,
    InvalidInputError,
    GenerationError,
    MalformedResponseError,
)

__all__ = [
    "__version__",
    "ParleyError",
    "InvalidInputError",
    "GenerationError",
    "MalformedResponseError",
]

__version__ = "0.1.0"
