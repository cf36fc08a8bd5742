"""AssemblyAI implementation of the TranscriptionProvider interface."""

import tempfile
import time

import assemblyai as aai
import httpx
from voice_common.logging import setup_logging

from domain.models import RecognitionResult
from exceptions import (
    ProviderConnectionError,
    ProviderTimeoutError,
    TranscriptionProviderError,
)

from .interfaces import TranscriptionProvider

logger = setup_logging()

_SUFFIXES = {
    "audio/wav": ".wav",
    "audio/mp3": ".mp3",
    "audio/flac": ".flac",
    "audio/ogg": ".ogg",
    "audio/webm": ".webm",
}


class AssemblyAITranscriber(TranscriptionProvider):
    """Handles audio transcription using AssemblyAI."""

    name = "assemblyai"

    def __init__(self, transcriber: aai.Transcriber, timeout_seconds: float = 30.0):
        self._transcriber = transcriber
        self._timeout_seconds = timeout_seconds

    def recognize(
        self, audio_data: bytes, mime_type: str, language: str
    ) -> RecognitionResult:
        """
        Transcribes audio data using AssemblyAI.

        Writes audio to a temp file (required by AssemblyAI SDK) and
        returns the transcript text with the overall confidence score.
        Polling stops once timeout_seconds have passed since submission.
        """
        config = aai.TranscriptionConfig(language_code=_language_code(language))
        suffix = _SUFFIXES.get(mime_type, ".wav")
        started = time.monotonic()
        try:
            with tempfile.NamedTemporaryFile(suffix=suffix, delete=True) as temp_file:
                temp_file.write(audio_data)
                temp_file.flush()

                transcript = self._transcriber.transcribe(
                    temp_file.name, config=config, poll_timeout=self._timeout_seconds
                )
        except httpx.TimeoutException as e:
            logger.exception("AssemblyAI request timed out")
            raise ProviderTimeoutError(self.name, "request timed out", cause=e) from e
        except httpx.TransportError as e:
            logger.exception("AssemblyAI request could not be sent")
            raise ProviderConnectionError(self.name, str(e), cause=e) from e
        except aai.TranscriptError as e:
            if time.monotonic() - started < self._timeout_seconds:
                logger.exception("AssemblyAI transcription failed")
                raise TranscriptionProviderError(self.name, str(e), cause=e) from e
            logger.error("AssemblyAI transcript did not complete in time")
            raise ProviderTimeoutError(
                self.name, "transcript did not complete in time", cause=e
            ) from e
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise TranscriptionProviderError(self.name, str(e), cause=e) from e

        if transcript.status == aai.TranscriptStatus.error:
            raise TranscriptionProviderError(self.name, str(transcript.error))

        text = transcript.text.strip() if transcript.text else None
        logger.info(
            "Audio transcription successful",
            extra={"has_text": text is not None, "confidence": transcript.confidence},
        )
        return RecognitionResult(
            text=text,
            confidence=transcript.confidence if text else None,
        )


def _language_code(language: str) -> str:
    """AssemblyAI expects bare ISO 639-1 codes for most languages."""
    return language.split("-")[0].lower()
