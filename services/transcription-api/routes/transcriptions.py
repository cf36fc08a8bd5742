"""Transcription endpoints: uploads and record queries."""

from datetime import datetime
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile
from voice_common.db_models import TranscriptionType
from voice_common.logging import setup_logging

from dependencies import get_transcription_handler
from exceptions import EmptyAudioError, TranscriptionNotFoundError
from handlers import TranscriptionHandler
from response_models import ErrorResponse, TranscriptionResponse

logger = setup_logging()

router = APIRouter(prefix="/api/transcriptions", tags=["transcriptions"])

HandlerDep = Annotated[TranscriptionHandler, Depends(get_transcription_handler)]


def _error(status_code: int, message: str, error_code: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(message=message, error_code=error_code).model_dump(),
    )


@router.post("/transcribe", response_model=TranscriptionResponse)
def transcribe_audio(file: UploadFile, handler: HandlerDep):
    """Transcribes an uploaded audio file."""
    audio_data = file.file.read()
    if not audio_data:
        raise _error(400, "File must not be empty", "EMPTY_FILE")

    if not (file.content_type or "").startswith("audio/"):
        raise _error(
            400,
            "Unsupported file type. Use audio files (.wav, .mp3, .flac, .ogg, .webm)",
            "UNSUPPORTED_FILE_TYPE",
        )

    logger.info(
        "Received transcription upload",
        extra={
            "file_name": file.filename,
            "content_type": file.content_type,
            "size": len(audio_data),
        },
    )

    try:
        return handler.transcribe_upload(audio_data, file.content_type, file.filename)
    except EmptyAudioError:
        raise _error(400, "File must not be empty", "EMPTY_FILE")
    except Exception as e:
        logger.error(f"Error transcribing {file.filename}: {e}")
        raise _error(500, "Error processing transcription", "TRANSCRIPTION_ERROR")


@router.post("/live-transcribe", response_model=TranscriptionResponse)
def live_transcribe(audio: UploadFile, handler: HandlerDep):
    """Transcribes a complete live recording sent in a single request."""
    audio_data = audio.file.read()
    if not audio_data:
        raise _error(400, "Audio data must not be empty", "EMPTY_AUDIO_DATA")

    try:
        return handler.transcribe_live_upload(audio_data, audio.content_type)
    except EmptyAudioError:
        raise _error(400, "Audio data must not be empty", "EMPTY_AUDIO_DATA")
    except Exception as e:
        logger.error(f"Error transcribing live recording: {e}")
        raise _error(
            500, "Error processing live transcription", "LIVE_TRANSCRIPTION_ERROR"
        )


@router.get("", response_model=List[TranscriptionResponse])
def list_transcriptions(handler: HandlerDep, type: TranscriptionType | None = None):
    """Returns all transcriptions, newest first, optionally filtered by type."""
    try:
        return handler.list_transcriptions(type)
    except Exception as e:
        logger.error(f"Error listing transcriptions: {e}")
        raise _error(500, "Error fetching transcriptions", "QUERY_ERROR")


@router.get("/search", response_model=List[TranscriptionResponse])
def search_transcriptions(query: str, handler: HandlerDep):
    """Returns transcriptions whose text contains the query, ignoring case."""
    try:
        return handler.search_transcriptions(query)
    except Exception as e:
        logger.error(f"Error searching transcriptions: {e}")
        raise _error(500, "Error searching transcriptions", "QUERY_ERROR")


@router.get("/range", response_model=List[TranscriptionResponse])
def list_transcriptions_between(start: datetime, end: datetime, handler: HandlerDep):
    """Returns transcriptions created between start and end, newest first."""
    try:
        return handler.list_transcriptions_between(start, end)
    except ValueError:
        raise _error(400, "start must not be after end", "INVALID_DATE_RANGE")
    except Exception as e:
        logger.error(f"Error listing transcriptions between {start} and {end}: {e}")
        raise _error(500, "Error fetching transcriptions", "QUERY_ERROR")


@router.get("/{transcription_id}", response_model=TranscriptionResponse)
def get_transcription(transcription_id: int, handler: HandlerDep):
    try:
        return handler.get_transcription(transcription_id)
    except TranscriptionNotFoundError:
        raise _error(404, "Transcription not found", "NOT_FOUND")
    except Exception as e:
        logger.error(f"Error fetching transcription {transcription_id}: {e}")
        raise _error(500, "Error fetching transcription", "QUERY_ERROR")


@router.delete("/{transcription_id}", status_code=204)
def delete_transcription(transcription_id: int, handler: HandlerDep):
    try:
        handler.delete_transcription(transcription_id)
    except TranscriptionNotFoundError:
        raise _error(404, "Transcription not found", "NOT_FOUND")
    except Exception as e:
        logger.error(f"Error deleting transcription {transcription_id}: {e}")
        raise _error(500, "Error deleting transcription", "DELETE_ERROR")
    return Response(status_code=204)
