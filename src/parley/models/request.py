from typing import Literal

from pydantic import BaseModel, Field, ConfigDict

# ─────────────────────────────────────────────────────────────────────────────
# Request handed to the text-generation collaborator
# ─────────────────────────────────────────────────────────────────────────────


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str


class EvaluationRequest(BaseModel):
    """Role-tagged messages plus the sampling parameters for one scoring call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    temperature: float = Field(..., ge=0.0, le=2.0)
    max_tokens: int = Field(..., gt=0)

    @property
    def system_prompt(self) -> str:
        return "\n\n".join(m.content for m in self.messages if m.role == "system")

    @property
    def user_prompt(self) -> str:
        return "\n\n".join(m.content for m in self.messages if m.role == "user")
