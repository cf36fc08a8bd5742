"""Domain models for the transcription service."""

from enum import Enum

from pydantic import BaseModel, Field
from voice_common.db_models import Transcription, TranscriptionOutcome

COULD_NOT_TRANSCRIBE = "Could not transcribe the audio"
TRANSCRIPTION_ERROR_PREFIX = "transcription error:"


class ReassembledAudio(BaseModel, frozen=True):
    """A session's chunks joined into one playable byte stream."""

    data: bytes
    mime_type: str
    file_name: str

    @property
    def size(self) -> int:
        return len(self.data)


class RecognitionResult(BaseModel, frozen=True):
    """What a speech recognition provider returned for one request."""

    text: str | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class TranscriptionResult(BaseModel, frozen=True):
    """Normalized outcome of a transcription attempt."""

    text: str
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    duration: float = Field(ge=0.0)
    outcome: TranscriptionOutcome = TranscriptionOutcome.SUCCESS
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return self.outcome not in (
            TranscriptionOutcome.SUCCESS,
            TranscriptionOutcome.EMPTY,
        )


class SessionFinishStatus(str, Enum):
    COMPLETED = "COMPLETED"
    NO_AUDIO = "NO_AUDIO"


class SessionFinishResult(BaseModel, frozen=True):
    """Result of finishing a live recording session."""

    session_id: str
    status: SessionFinishStatus
    transcription: Transcription | None = None
