"""Shared exceptions for infrastructure failures."""


class AudioBufferError(Exception):
    """Raised when the audio chunk buffer cannot be read or written."""

    def __init__(self, session_id: str, operation: str, cause: Exception | None = None):
        self.session_id = session_id
        self.operation = operation
        self.cause = cause
        super().__init__(f"Audio buffer {operation} failed for session '{session_id}'")


class TranscriptionPersistenceError(Exception):
    """Raised when reading or writing transcription records fails."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Transcription record {operation} failed")
