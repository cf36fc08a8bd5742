"""Handler for live recording sessions streamed as audio chunks."""

from voice_common.logging import setup_logging

from domain import AudioReassembler, SessionFinishResult, SessionFinishStatus
from infrastructure.interfaces import AudioBufferStore

from .transcription_handler import (
    LIVE_MIME_TYPE,
    TranscriptionHandler,
    live_recording_file_name,
)

logger = setup_logging()


class LiveSessionHandler:
    """
    Buffers streamed chunks per session and transcribes them on finish.

    A session accumulates chunks until finished. Finishing takes the whole
    buffer in one step, so the buffer is cleared exactly once whatever
    happens afterwards, and appending again starts a new recording.
    """

    def __init__(
        self,
        buffer_store: AudioBufferStore,
        reassembler: AudioReassembler,
        transcription_handler: TranscriptionHandler,
    ):
        self._buffer_store = buffer_store
        self._reassembler = reassembler
        self._transcription_handler = transcription_handler

    def append_chunk(self, session_id: str, chunk: bytes) -> int:
        """
        Adds a chunk to the session's buffer.

        Returns:
            The number of chunks buffered for the session afterwards.

        Raises:
            AudioBufferError: If the buffer store fails.
        """
        self._buffer_store.append(session_id, chunk)
        return self._buffer_store.size_of(session_id)

    def chunk_count(self, session_id: str) -> int:
        return self._buffer_store.size_of(session_id)

    def finish_session(
        self, session_id: str, mime_type: str | None = None
    ) -> SessionFinishResult:
        """
        Transcribes everything buffered for the session.

        A session with no buffered audio finishes with NO_AUDIO: no provider
        call is made and no record is created.

        Args:
            session_id: The client's session key.
            mime_type: Declared type of the streamed audio, WAV if absent.

        Returns:
            SessionFinishResult with the LIVE_RECORDING record when completed.

        Raises:
            AudioBufferError: If the buffer store fails.
            TranscriptionPersistenceError: If the record cannot be stored.
        """
        chunks = self._buffer_store.take_all(session_id)
        audio = self._reassembler.reassemble(
            chunks,
            mime_type=mime_type or LIVE_MIME_TYPE,
            file_name=live_recording_file_name(),
        )

        if not audio.data:
            logger.info(
                "Session finished without audio",
                extra={"session_id": session_id, "chunk_count": len(chunks)},
            )
            return SessionFinishResult(
                session_id=session_id, status=SessionFinishStatus.NO_AUDIO
            )

        logger.info(
            "Finishing session",
            extra={
                "session_id": session_id,
                "chunk_count": len(chunks),
                "size": audio.size,
            },
        )
        transcription = self._transcription_handler.transcribe_live(audio)
        return SessionFinishResult(
            session_id=session_id,
            status=SessionFinishStatus.COMPLETED,
            transcription=transcription,
        )
