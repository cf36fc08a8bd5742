"""Core business logic for provider-backed transcription."""

from voice_common.db_models import TranscriptionOutcome
from voice_common.logging import setup_logging

from exceptions import TranscriptionProviderError
from infrastructure.interfaces import TranscriptionProvider

from .duration_estimator import DurationEstimator
from .mime_types import normalize_mime_type
from .models import (
    COULD_NOT_TRANSCRIBE,
    TRANSCRIPTION_ERROR_PREFIX,
    RecognitionResult,
    TranscriptionResult,
)

logger = setup_logging()


class TranscriptionOrchestrator:
    """Runs a provider request and normalizes whatever comes back."""

    def __init__(
        self,
        provider: TranscriptionProvider,
        duration_estimator: DurationEstimator,
        language: str,
    ):
        self._provider = provider
        self._duration_estimator = duration_estimator
        self._language = language

    def transcribe(
        self,
        audio_data: bytes,
        mime_type: str | None,
        file_name: str | None = None,
    ) -> TranscriptionResult:
        """
        Transcribes audio through the configured provider.

        Provider failures never raise: they come back as a degraded result
        whose text starts with the transcription error prefix and whose
        outcome names the failure class. Duration is always computed from
        the local bytes, whatever the provider did.

        Args:
            audio_data: The complete audio stream.
            mime_type: Declared content type, normalized before sending.
            file_name: Original file name, used for log context only.

        Returns:
            TranscriptionResult with text, confidence, duration and outcome.

        Raises:
            ValueError: If audio_data is None.
        """
        if audio_data is None:
            raise ValueError("audio_data is required")

        normalized_mime_type = normalize_mime_type(mime_type)
        duration = self._duration_estimator.estimate(audio_data, normalized_mime_type)

        try:
            recognition = self._provider.recognize(
                audio_data, normalized_mime_type, self._language
            )
        except TranscriptionProviderError as e:
            return self._degraded(e.outcome, e.reason, e, duration, file_name)
        except Exception as e:
            logger.exception(
                "Provider raised an unexpected error",
                extra={"provider": self._provider.name, "file_name": file_name},
            )
            return self._degraded(
                TranscriptionOutcome.PROVIDER_ERROR, str(e), e, duration, file_name
            )

        result = self._normalize(recognition, duration)
        logger.info(
            "Transcription completed",
            extra={
                "provider": self._provider.name,
                "file_name": file_name,
                "mime_type": normalized_mime_type,
                "size": len(audio_data),
                "duration": duration,
                "outcome": result.outcome.value,
            },
        )
        return result

    def _normalize(
        self, recognition: RecognitionResult, duration: float
    ) -> TranscriptionResult:
        """Maps an empty or sentinel answer onto the could-not-transcribe result."""
        text = (recognition.text or "").strip()
        if not text or text == COULD_NOT_TRANSCRIBE:
            return TranscriptionResult(
                text=COULD_NOT_TRANSCRIBE,
                confidence=None,
                duration=duration,
                outcome=TranscriptionOutcome.EMPTY,
            )
        return TranscriptionResult(
            text=text,
            confidence=recognition.confidence,
            duration=duration,
        )

    def _degraded(
        self,
        outcome: TranscriptionOutcome,
        reason: str,
        error: Exception,
        duration: float,
        file_name: str | None,
    ) -> TranscriptionResult:
        logger.warning(
            "Transcription degraded",
            extra={
                "provider": self._provider.name,
                "file_name": file_name,
                "outcome": outcome.value,
                "error": str(error),
            },
        )
        return TranscriptionResult(
            text=f"{TRANSCRIPTION_ERROR_PREFIX} {reason}",
            confidence=None,
            duration=duration,
            outcome=outcome,
            error=str(error),
        )
