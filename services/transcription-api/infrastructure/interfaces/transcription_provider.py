"""Abstract interface for speech recognition providers."""

from abc import ABC, abstractmethod

from domain.models import RecognitionResult


class TranscriptionProvider(ABC):
    """Abstract base class for speech-to-text backends."""

    name: str = "provider"

    @abstractmethod
    def recognize(
        self, audio_data: bytes, mime_type: str, language: str
    ) -> RecognitionResult:
        """
        Transcribes audio data into text.

        Args:
            audio_data: Raw audio file bytes.
            mime_type: Normalized audio mime type.
            language: Language tag of the speech, e.g. "pt-BR".

        Returns:
            RecognitionResult whose text is None when the provider
            produced no candidate transcript.

        Raises:
            TranscriptionProviderError: If the provider call fails.
        """
        pass
