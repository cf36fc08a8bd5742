import re
from datetime import datetime, timedelta, timezone

import pytest
from voice_common.db_models import TranscriptionOutcome, TranscriptionType

from domain import AudioReassembler, DurationEstimator, SessionFinishStatus, TranscriptionOrchestrator
from exceptions import EmptyAudioError, ProviderConnectionError, TranscriptionNotFoundError
from handlers import LiveSessionHandler, TranscriptionHandler
from stubs import StubProvider, make_wav

LIVE_NAME = re.compile(r"^live-recording-\d+\.wav$")


def _handlers(repository, buffer_store, provider):
    transcription_handler = TranscriptionHandler(
        TranscriptionOrchestrator(provider, DurationEstimator(), "pt-BR"), repository
    )
    live_handler = LiveSessionHandler(buffer_store, AudioReassembler(), transcription_handler)
    return transcription_handler, live_handler


def test_upload_creates_file_upload_record(transcription_handler, provider):
    audio = make_wav(8000)

    record = transcription_handler.transcribe_upload(audio, "audio/wav", "note.wav")

    assert record.id is not None
    assert record.file_name == "note.wav"
    assert record.mime_type == "audio/wav"
    assert record.file_size == len(audio)
    assert record.duration == 0.5
    assert record.transcribed_text == "hello world"
    assert record.transcription_type == TranscriptionType.FILE_UPLOAD
    assert len(provider.calls) == 1


def test_upload_without_name_or_type_uses_unknown(transcription_handler, provider):
    record = transcription_handler.transcribe_upload(b"\x01" * 320, None, None)

    assert record.file_name == "unknown"
    assert record.mime_type == "unknown"
    assert provider.calls[0][1] == "audio/wav"


def test_empty_upload_is_rejected_before_provider(transcription_handler, provider, repository):
    with pytest.raises(EmptyAudioError):
        transcription_handler.transcribe_upload(b"", "audio/wav", "empty.wav")

    assert provider.calls == []
    assert repository.list_all() == []


def test_live_upload_creates_live_record(transcription_handler):
    record = transcription_handler.transcribe_live_upload(b"\x02" * 64, None)

    assert LIVE_NAME.match(record.file_name)
    assert record.mime_type == "audio/wav"
    assert record.transcription_type == TranscriptionType.LIVE_RECORDING


def test_finish_before_any_append_reports_no_audio(live_session_handler, provider, repository):
    result = live_session_handler.finish_session("never-started")

    assert result.status == SessionFinishStatus.NO_AUDIO
    assert result.transcription is None
    assert provider.calls == []
    assert repository.list_all() == []


def test_finish_reassembles_chunks_into_live_record(live_session_handler, provider):
    chunks = [b"\x00\x01", b"\x02", b"\x03\x04\x05"]
    for chunk in chunks:
        live_session_handler.append_chunk("session", chunk)

    result = live_session_handler.finish_session("session")

    assert result.status == SessionFinishStatus.COMPLETED
    record = result.transcription
    assert provider.calls[0][0] == b"".join(chunks)
    assert record.file_size == sum(len(c) for c in chunks)
    assert record.transcription_type == TranscriptionType.LIVE_RECORDING
    assert LIVE_NAME.match(record.file_name)
    assert record.mime_type == "audio/wav"


def test_finish_keeps_declared_mime_type(live_session_handler, provider):
    live_session_handler.append_chunk("session", b"\x1a\x45\xdf\xa3")

    result = live_session_handler.finish_session("session", "audio/webm")

    assert result.transcription.mime_type == "audio/webm"
    assert provider.calls[0][1] == "audio/webm"


def test_second_finish_reports_no_audio(live_session_handler, provider, repository):
    live_session_handler.append_chunk("session", b"abc")

    first = live_session_handler.finish_session("session")
    second = live_session_handler.finish_session("session")

    assert first.status == SessionFinishStatus.COMPLETED
    assert second.status == SessionFinishStatus.NO_AUDIO
    assert len(provider.calls) == 1
    assert len(repository.list_all()) == 1


def test_take_all_then_finish_reports_no_audio(live_session_handler, buffer_store):
    live_session_handler.append_chunk("session", b"abc")
    buffer_store.take_all("session")

    assert live_session_handler.finish_session("session").status == SessionFinishStatus.NO_AUDIO


def test_only_empty_chunks_report_no_audio(live_session_handler, provider):
    live_session_handler.append_chunk("session", b"")

    result = live_session_handler.finish_session("session")

    assert result.status == SessionFinishStatus.NO_AUDIO
    assert provider.calls == []
    assert live_session_handler.chunk_count("session") == 0


def test_append_after_finish_starts_new_recording(live_session_handler, provider):
    live_session_handler.append_chunk("session", b"first")
    live_session_handler.finish_session("session")

    assert live_session_handler.append_chunk("session", b"second") == 1
    live_session_handler.finish_session("session")

    assert [call[0] for call in provider.calls] == [b"first", b"second"]


def test_provider_failure_still_persists_degraded_record(repository, buffer_store):
    provider = StubProvider(error=ProviderConnectionError("stub", "connection refused"))
    _, live_handler = _handlers(repository, buffer_store, provider)
    live_handler.append_chunk("session", b"\x00" * 64000)

    result = live_handler.finish_session("session")

    record = result.transcription
    assert result.status == SessionFinishStatus.COMPLETED
    assert record.transcribed_text.startswith("transcription error:")
    assert record.confidence is None
    assert record.duration == 2.0
    assert record.outcome == TranscriptionOutcome.NETWORK_ERROR
    assert buffer_store.size_of("session") == 0


def test_buffer_is_cleared_when_persistence_fails(buffer_store, provider):
    class BrokenRepository:
        def create(self, transcription):
            raise RuntimeError("database unavailable")

    transcription_handler = TranscriptionHandler(
        TranscriptionOrchestrator(provider, DurationEstimator(), "pt-BR"),
        BrokenRepository(),
    )
    live_handler = LiveSessionHandler(buffer_store, AudioReassembler(), transcription_handler)
    live_handler.append_chunk("session", b"abc")

    with pytest.raises(RuntimeError):
        live_handler.finish_session("session")

    assert buffer_store.size_of("session") == 0


def test_get_and_delete_missing_record(transcription_handler):
    with pytest.raises(TranscriptionNotFoundError):
        transcription_handler.get_transcription(42)
    with pytest.raises(TranscriptionNotFoundError):
        transcription_handler.delete_transcription(42)


def test_list_filters_by_type(transcription_handler):
    transcription_handler.transcribe_upload(b"a", "audio/wav", "a.wav")
    transcription_handler.transcribe_live_upload(b"b", "audio/wav")

    uploads = transcription_handler.list_transcriptions(TranscriptionType.FILE_UPLOAD)

    assert [t.file_name for t in uploads] == ["a.wav"]
    assert len(transcription_handler.list_transcriptions()) == 2


def test_date_range_rejects_reversed_bounds(transcription_handler):
    start = datetime(2025, 2, 1, tzinfo=timezone.utc)

    with pytest.raises(ValueError):
        transcription_handler.list_transcriptions_between(start, start - timedelta(days=1))


def test_date_range_treats_naive_bounds_as_utc(transcription_handler):
    transcription_handler.transcribe_upload(b"a", "audio/wav", "a.wav")
    now = datetime.now(timezone.utc).replace(tzinfo=None)

    found = transcription_handler.list_transcriptions_between(
        now - timedelta(minutes=5), now + timedelta(minutes=5)
    )

    assert [t.file_name for t in found] == ["a.wav"]
