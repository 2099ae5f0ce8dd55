import pytest
from pydantic import ValidationError

from parley.models.transcript import Speaker, TranscriptEntry


class TestTranscriptEntry:
    """Tests for TranscriptEntry model."""

    def test_roles(self) -> None:
        assert TranscriptEntry(role="trainee", content="hi").role is Speaker.trainee
        assert TranscriptEntry(role="persona", content="hello").role is Speaker.persona

    def test_chat_role_aliases(self) -> None:
        """Chat-completion role names map onto speakers."""
        assert TranscriptEntry(role="user", content="hi").role is Speaker.trainee
        assert TranscriptEntry(role="assistant", content="hello").role is Speaker.persona
        assert TranscriptEntry(role=" User ", content="hi").role is Speaker.trainee

    def test_unknown_role_fails(self) -> None:
        with pytest.raises(ValidationError):
            TranscriptEntry(role="system", content="nope")

    def test_speaker_label(self) -> None:
        assert TranscriptEntry(role="trainee", content="x").speaker_label == "Trainee"
        assert TranscriptEntry(role="persona", content="x").speaker_label == "AI Persona"

    def test_storage_columns_ignored(self) -> None:
        entry = TranscriptEntry.model_validate(
            {"id": 7, "role": "user", "content": "hi", "created_at": "2024-01-01T00:00:00Z"}
        )
        assert entry.role is Speaker.trainee
        assert entry.model_dump() == {"role": Speaker.trainee, "content": "hi"}

    def test_content_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TranscriptEntry(role="trainee")  # type: ignore[call-arg]

        assert "Field required" in str(exc_info.value)
