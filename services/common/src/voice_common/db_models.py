from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import Column
from sqlalchemy.types import Text
from sqlmodel import Field, SQLModel


class TranscriptionType(str, Enum):
    FILE_UPLOAD = "FILE_UPLOAD"
    LIVE_RECORDING = "LIVE_RECORDING"


class TranscriptionOutcome(str, Enum):
    """How a transcription attempt ended."""

    SUCCESS = "SUCCESS"
    EMPTY = "EMPTY"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    PROVIDER_ERROR = "PROVIDER_ERROR"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Transcription(SQLModel, table=True):
    __tablename__ = "transcriptions"

    id: Optional[int] = Field(default=None, primary_key=True)
    file_name: str = Field(max_length=255)
    transcribed_text: str = Field(sa_column=Column(Text, nullable=False))
    duration: float = Field(ge=0.0)
    file_size: int = Field(ge=0)
    mime_type: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=_utc_now, index=True)
    transcription_type: TranscriptionType = Field(index=True)
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    outcome: TranscriptionOutcome = TranscriptionOutcome.SUCCESS
