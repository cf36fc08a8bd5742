"""Dependency injection configuration for the transcription-api service."""

from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

import assemblyai as aai
import redis
from google import genai
from google.genai import types
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine
from voice_common.logging import setup_logging

from config import AppConfig, load_config
from domain import AudioReassembler, DurationEstimator, TranscriptionOrchestrator
from handlers import LiveSessionHandler, TranscriptionHandler
from infrastructure import (
    AssemblyAITranscriber,
    GeminiTranscriber,
    InMemoryAudioBufferStore,
    RedisAudioBufferStore,
)
from infrastructure.interfaces import AudioBufferStore, TranscriptionProvider
from repositories import TranscriptionRepository

logger = setup_logging()


@lru_cache
def get_config() -> AppConfig:
    """Returns the configuration loaded from the environment."""
    return load_config()


@lru_cache
def get_engine() -> Engine:
    """Returns the database engine, creating tables on first use."""
    config = get_config()
    engine = create_engine(config.postgres.url)
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized", extra={"host": config.postgres.host})
    return engine


@contextmanager
def _session_factory() -> Generator[Session, None, None]:
    """Creates a database session context manager."""
    with Session(get_engine()) as session:
        yield session


@lru_cache
def get_repository() -> TranscriptionRepository:
    """Returns the transcription record repository."""
    return TranscriptionRepository(_session_factory)


@lru_cache
def get_buffer_store() -> AudioBufferStore:
    """Returns the audio chunk buffer selected by AUDIO_BUFFER_BACKEND."""
    config = get_config()
    if config.buffer.backend == "memory":
        logger.info("Using in-memory audio buffer")
        return InMemoryAudioBufferStore(config.redis.buffer_ttl_seconds)

    client = redis.Redis(
        host=config.redis.host,
        port=config.redis.port,
        db=config.redis.db,
    )
    if not client.ping():
        logger.error("Redis connection failed", extra={"host": config.redis.host})
        raise ConnectionError("Redis connection failed")
    return RedisAudioBufferStore(client, config.redis.buffer_ttl_seconds)


@lru_cache
def get_provider() -> TranscriptionProvider:
    """Returns the speech recognition provider selected by TRANSCRIPTION_PROVIDER."""
    config = get_config()
    timeout_seconds = config.transcription.timeout_seconds

    if config.transcription.provider == "assemblyai":
        aai.settings.api_key = config.assemblyai.api_key
        aai.settings.http_timeout = timeout_seconds
        return AssemblyAITranscriber(aai.Transcriber(), timeout_seconds)

    client = genai.Client(
        api_key=config.gemini.api_key,
        http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
    )
    return GeminiTranscriber(client, config.gemini.model_name)


@lru_cache
def get_transcription_handler() -> TranscriptionHandler:
    """Returns the handler for uploads and record queries."""
    orchestrator = TranscriptionOrchestrator(
        get_provider(),
        DurationEstimator(),
        get_config().transcription.language,
    )
    return TranscriptionHandler(orchestrator, get_repository())


@lru_cache
def get_live_session_handler() -> LiveSessionHandler:
    """Returns the handler for streamed live recording sessions."""
    return LiveSessionHandler(
        get_buffer_store(),
        AudioReassembler(),
        get_transcription_handler(),
    )
