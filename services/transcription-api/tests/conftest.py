from contextlib import contextmanager

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from domain import AudioReassembler, DurationEstimator, TranscriptionOrchestrator
from handlers import LiveSessionHandler, TranscriptionHandler
from infrastructure import InMemoryAudioBufferStore
from repositories import TranscriptionRepository
from stubs import StubProvider


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    @contextmanager
    def session_factory():
        with Session(engine) as session:
            yield session

    return TranscriptionRepository(session_factory)


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def orchestrator(provider):
    return TranscriptionOrchestrator(provider, DurationEstimator(), "pt-BR")


@pytest.fixture
def transcription_handler(orchestrator, repository):
    return TranscriptionHandler(orchestrator, repository)


@pytest.fixture
def buffer_store():
    return InMemoryAudioBufferStore()


@pytest.fixture
def live_session_handler(buffer_store, transcription_handler):
    return LiveSessionHandler(buffer_store, AudioReassembler(), transcription_handler)
