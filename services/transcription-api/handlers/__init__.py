"""Handler layer exports."""

from .live_session_handler import LiveSessionHandler
from .transcription_handler import TranscriptionHandler

__all__ = ["LiveSessionHandler", "TranscriptionHandler"]
