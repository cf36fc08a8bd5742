"""Application configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel
from voice_common import PostgresConfig, RedisConfig


class GeminiConfig(BaseModel, frozen=True):
    """Gemini transcription provider configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str


class TranscriptionConfig(BaseModel, frozen=True):
    """Provider selection and request settings."""

    provider: Literal["gemini", "assemblyai"] = "gemini"
    language: str = "pt-BR"
    timeout_seconds: float = 30.0


class BufferConfig(BaseModel, frozen=True):
    """Where streamed audio chunks are staged until a session finishes."""

    backend: Literal["redis", "memory"] = "redis"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    redis: RedisConfig
    postgres: PostgresConfig
    gemini: GeminiConfig
    assemblyai: AssemblyAIConfig
    transcription: TranscriptionConfig
    buffer: BufferConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        redis=RedisConfig(
            host=os.getenv("REDIS_HOST", "redis"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            buffer_ttl_seconds=int(os.getenv("AUDIO_BUFFER_TTL_SECONDS", "3600")),
        ),
        postgres=PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "voice_transcribe"),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash"),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        transcription=TranscriptionConfig(
            provider=os.getenv("TRANSCRIPTION_PROVIDER", "gemini"),
            language=os.getenv("TRANSCRIPTION_LANGUAGE", "pt-BR"),
            timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30")),
        ),
        buffer=BufferConfig(
            backend=os.getenv("AUDIO_BUFFER_BACKEND", "redis"),
        ),
    )
