"""Custom exceptions for the transcription-api service."""

from voice_common.db_models import TranscriptionOutcome


class TranscriptionProviderError(Exception):
    """Raised when the speech recognition provider fails."""

    outcome = TranscriptionOutcome.PROVIDER_ERROR

    def __init__(self, provider: str, reason: str, cause: Exception | None = None):
        self.provider = provider
        self.reason = reason
        self.cause = cause
        super().__init__(f"{provider} transcription failed: {reason}")


class ProviderConnectionError(TranscriptionProviderError):
    """Raised when the provider cannot be reached."""

    outcome = TranscriptionOutcome.NETWORK_ERROR


class ProviderTimeoutError(TranscriptionProviderError):
    """Raised when the provider does not answer within the configured timeout."""

    outcome = TranscriptionOutcome.TIMEOUT


class MalformedProviderResponseError(TranscriptionProviderError):
    """Raised when the provider answers with an unexpected response shape."""

    outcome = TranscriptionOutcome.MALFORMED_RESPONSE


class EmptyAudioError(Exception):
    """Raised when a transcription is requested for zero bytes of audio."""

    def __init__(self, file_name: str | None = None):
        self.file_name = file_name
        super().__init__(f"Audio '{file_name or 'unknown'}' is empty")


class TranscriptionNotFoundError(Exception):
    """Raised when a requested transcription does not exist."""

    def __init__(self, transcription_id: int):
        self.transcription_id = transcription_id
        super().__init__(f"Transcription {transcription_id} not found")
