from voice_common.config import PostgresConfig, RedisConfig
from voice_common.db_models import (
    Transcription,
    TranscriptionOutcome,
    TranscriptionType,
)
from voice_common.exceptions import (
    AudioBufferError,
    TranscriptionPersistenceError,
)
from voice_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "AudioBufferError",
    "TranscriptionPersistenceError",
    "PostgresConfig",
    "RedisConfig",
    "Transcription",
    "TranscriptionOutcome",
    "TranscriptionType",
]
