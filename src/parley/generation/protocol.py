"""Generator protocol for the text-generation collaborator.

The scoring engine never talks to a provider directly. Anything with an async
``generate`` method of this shape can be plugged in: the bundled
pydantic_ai-backed generator, an in-house gateway client, or a deterministic
stub in tests.
"""

from typing import Protocol, Sequence

from parley.models.request import ChatMessage


class GeneratorProtocol(Protocol):
    """Minimal contract for a text generator.

    Implementations return the raw reply text and raise
    ``parley.errors.GenerationError`` on transport, auth or rate-limit
    failures.
    """

    async def generate(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str: ...


__all__ = ["GeneratorProtocol"]
