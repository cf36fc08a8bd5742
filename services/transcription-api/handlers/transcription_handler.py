"""Handler that turns transcription attempts into persisted records."""

import time
from datetime import datetime, timezone

from voice_common.db_models import Transcription, TranscriptionType
from voice_common.logging import setup_logging

from domain import ReassembledAudio, TranscriptionOrchestrator, TranscriptionResult
from exceptions import EmptyAudioError, TranscriptionNotFoundError
from repositories import TranscriptionRepository

logger = setup_logging()

UNKNOWN = "unknown"
LIVE_MIME_TYPE = "audio/wav"


def live_recording_file_name() -> str:
    """Display name for audio captured through a live recording."""
    return f"live-recording-{int(time.time() * 1000)}.wav"


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC, like stored creation times."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class TranscriptionHandler:
    """Orchestrates transcription and record construction for both call paths."""

    def __init__(
        self,
        orchestrator: TranscriptionOrchestrator,
        repository: TranscriptionRepository,
    ):
        self._orchestrator = orchestrator
        self._repository = repository

    def transcribe_upload(
        self,
        audio_data: bytes,
        mime_type: str | None,
        file_name: str | None,
    ) -> Transcription:
        """
        Transcribes an uploaded file and stores a FILE_UPLOAD record.

        Raises:
            EmptyAudioError: If the upload holds no bytes.
            TranscriptionPersistenceError: If the record cannot be stored.
        """
        if not audio_data:
            raise EmptyAudioError(file_name)

        result = self._orchestrator.transcribe(audio_data, mime_type, file_name)
        return self._save(
            result,
            file_name=file_name or UNKNOWN,
            mime_type=mime_type or UNKNOWN,
            file_size=len(audio_data),
            transcription_type=TranscriptionType.FILE_UPLOAD,
        )

    def transcribe_live_upload(
        self, audio_data: bytes, mime_type: str | None
    ) -> Transcription:
        """Transcribes a complete recording sent in one request as LIVE_RECORDING."""
        if not audio_data:
            raise EmptyAudioError()

        return self.transcribe_live(
            ReassembledAudio(
                data=audio_data,
                mime_type=mime_type or LIVE_MIME_TYPE,
                file_name=live_recording_file_name(),
            )
        )

    def transcribe_live(self, audio: ReassembledAudio) -> Transcription:
        """
        Transcribes reassembled session audio and stores a LIVE_RECORDING record.

        Raises:
            EmptyAudioError: If the reassembled audio holds no bytes.
            TranscriptionPersistenceError: If the record cannot be stored.
        """
        if not audio.data:
            raise EmptyAudioError(audio.file_name)

        result = self._orchestrator.transcribe(
            audio.data, audio.mime_type, audio.file_name
        )
        return self._save(
            result,
            file_name=audio.file_name,
            mime_type=audio.mime_type or LIVE_MIME_TYPE,
            file_size=audio.size,
            transcription_type=TranscriptionType.LIVE_RECORDING,
        )

    def list_transcriptions(
        self, transcription_type: TranscriptionType | None = None
    ) -> list[Transcription]:
        if transcription_type is None:
            return self._repository.list_all()
        return self._repository.list_by_type(transcription_type)

    def search_transcriptions(self, term: str) -> list[Transcription]:
        return self._repository.search(term)

    def list_transcriptions_between(
        self, start: datetime, end: datetime
    ) -> list[Transcription]:
        """
        Raises:
            ValueError: If start is after end.
        """
        start, end = _as_utc(start), _as_utc(end)
        if start > end:
            raise ValueError("start must not be after end")
        return self._repository.list_by_date_range(start, end)

    def get_transcription(self, transcription_id: int) -> Transcription:
        """
        Raises:
            TranscriptionNotFoundError: If no record has that id.
        """
        transcription = self._repository.get_by_id(transcription_id)
        if transcription is None:
            raise TranscriptionNotFoundError(transcription_id)
        return transcription

    def delete_transcription(self, transcription_id: int) -> None:
        if not self._repository.delete_by_id(transcription_id):
            raise TranscriptionNotFoundError(transcription_id)

    def _save(
        self,
        result: TranscriptionResult,
        file_name: str,
        mime_type: str,
        file_size: int,
        transcription_type: TranscriptionType,
    ) -> Transcription:
        transcription = self._repository.create(
            Transcription(
                file_name=file_name,
                transcribed_text=result.text,
                duration=result.duration,
                file_size=file_size,
                mime_type=mime_type,
                transcription_type=transcription_type,
                confidence=result.confidence,
                outcome=result.outcome,
            )
        )
        logger.info(
            "Audio transcribed",
            extra={
                "transcription_id": transcription.id,
                "file_name": file_name,
                "file_size": file_size,
                "outcome": result.outcome.value,
            },
        )
        return transcription
