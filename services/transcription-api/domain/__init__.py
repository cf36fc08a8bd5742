"""Domain layer exports."""

from .models import (
    COULD_NOT_TRANSCRIBE,
    TRANSCRIPTION_ERROR_PREFIX,
    ReassembledAudio,
    RecognitionResult,
    SessionFinishResult,
    SessionFinishStatus,
    TranscriptionResult,
)
from .mime_types import normalize_mime_type
from .audio_reassembler import AudioReassembler
from .duration_estimator import DurationEstimator
from .transcription_orchestrator import TranscriptionOrchestrator

__all__ = [
    "COULD_NOT_TRANSCRIBE",
    "TRANSCRIPTION_ERROR_PREFIX",
    "AudioReassembler",
    "DurationEstimator",
    "ReassembledAudio",
    "RecognitionResult",
    "SessionFinishResult",
    "SessionFinishStatus",
    "TranscriptionOrchestrator",
    "TranscriptionResult",
    "normalize_mime_type",
]
