"""Infrastructure interface exports."""

from .audio_buffer_store import AudioBufferStore
from .transcription_provider import TranscriptionProvider

__all__ = ["AudioBufferStore", "TranscriptionProvider"]
