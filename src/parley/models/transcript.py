from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# ─────────────────────────────────────────────────────────────────────────────
# Conversation transcript
# ─────────────────────────────────────────────────────────────────────────────


class Speaker(str, Enum):
    trainee = "trainee"
    persona = "persona"


# Chat-completion role names used by the live roleplay session.
_ROLE_ALIASES = {
    "user": Speaker.trainee,
    "assistant": Speaker.persona,
}


class TranscriptEntry(BaseModel):
    """One turn of the roleplay conversation."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    role: Speaker
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v: Any) -> Any:
        if isinstance(v, str):
            key = v.strip().lower()
            return _ROLE_ALIASES.get(key, key)
        return v

    @property
    def speaker_label(self) -> str:
        return "Trainee" if self.role is Speaker.trainee else "AI Persona"
