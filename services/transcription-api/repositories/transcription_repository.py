"""Repository for transcription record persistence."""

from datetime import datetime

from sqlmodel import Session, col, select
from voice_common import TranscriptionPersistenceError
from voice_common.db_models import Transcription, TranscriptionType
from voice_common.logging import setup_logging

logger = setup_logging()


class TranscriptionRepository:
    """
    Handles database operations for transcription records.

    Encapsulates SQL queries and transaction management,
    keeping the handler layer free of database concerns.
    All listings are ordered newest first.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def create(self, transcription: Transcription) -> Transcription:
        """
        Persists a new transcription record.

        Returns:
            The stored record with its assigned id.

        Raises:
            TranscriptionPersistenceError: If the insert fails.
        """
        try:
            with self._session_factory() as db_session:
                db_session.add(transcription)
                db_session.commit()
                db_session.refresh(transcription)
        except Exception as e:
            logger.exception(
                "Failed to persist transcription",
                extra={"file_name": transcription.file_name},
            )
            raise TranscriptionPersistenceError("create", cause=e) from e

        logger.info(
            "Transcription persisted",
            extra={
                "transcription_id": transcription.id,
                "transcription_type": transcription.transcription_type.value,
            },
        )
        return transcription

    def list_all(self) -> list[Transcription]:
        return self._list(select(Transcription), "list")

    def list_by_type(self, transcription_type: TranscriptionType) -> list[Transcription]:
        statement = select(Transcription).where(
            Transcription.transcription_type == transcription_type
        )
        return self._list(statement, "list_by_type")

    def search(self, term: str) -> list[Transcription]:
        """Case-insensitive substring match on the transcribed text."""
        statement = select(Transcription).where(
            col(Transcription.transcribed_text).icontains(term, autoescape=True)
        )
        return self._list(statement, "search")

    def list_by_date_range(self, start: datetime, end: datetime) -> list[Transcription]:
        """Records created between start and end, both inclusive."""
        statement = select(Transcription).where(
            col(Transcription.created_at) >= start,
            col(Transcription.created_at) <= end,
        )
        return self._list(statement, "list_by_date_range")

    def get_by_id(self, transcription_id: int) -> Transcription | None:
        try:
            with self._session_factory() as db_session:
                return db_session.get(Transcription, transcription_id)
        except Exception as e:
            logger.exception(
                "Failed to load transcription",
                extra={"transcription_id": transcription_id},
            )
            raise TranscriptionPersistenceError("get", cause=e) from e

    def delete_by_id(self, transcription_id: int) -> bool:
        """
        Deletes a transcription record.

        Returns:
            False if no record with that id exists.

        Raises:
            TranscriptionPersistenceError: If the delete fails.
        """
        try:
            with self._session_factory() as db_session:
                transcription = db_session.get(Transcription, transcription_id)
                if transcription is None:
                    return False
                db_session.delete(transcription)
                db_session.commit()
        except Exception as e:
            logger.exception(
                "Failed to delete transcription",
                extra={"transcription_id": transcription_id},
            )
            raise TranscriptionPersistenceError("delete", cause=e) from e

        logger.info(
            "Transcription deleted", extra={"transcription_id": transcription_id}
        )
        return True

    def _list(self, statement, operation: str) -> list[Transcription]:
        statement = statement.order_by(
            col(Transcription.created_at).desc(), col(Transcription.id).desc()
        )
        try:
            with self._session_factory() as db_session:
                return list(db_session.exec(statement).all())
        except Exception as e:
            logger.exception("Failed to query transcriptions", extra={"operation": operation})
            raise TranscriptionPersistenceError(operation, cause=e) from e
