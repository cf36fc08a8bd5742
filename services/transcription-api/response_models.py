"""Response models for the transcription API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from voice_common.db_models import TranscriptionOutcome, TranscriptionType


class TranscriptionResponse(BaseModel):
    """A stored transcription record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    transcribed_text: str
    duration: float
    file_size: int
    mime_type: str
    created_at: datetime
    transcription_type: TranscriptionType
    confidence: float | None = None
    outcome: TranscriptionOutcome


class ChunkAcceptedResponse(BaseModel):
    """Response returned after an audio chunk is buffered."""

    message: str
    session_id: str
    chunk_count: int


class ErrorResponse(BaseModel):
    """Error body for rejected or failed requests."""

    message: str
    error_code: str
