"""Live recording endpoints: chunk streaming and session finish."""

import json
from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    Form,
    HTTPException,
    UploadFile,
    WebSocket,
    WebSocketDisconnect,
)
from starlette.concurrency import run_in_threadpool
from voice_common.logging import setup_logging

from dependencies import get_live_session_handler
from domain import SessionFinishStatus
from handlers import LiveSessionHandler
from response_models import ChunkAcceptedResponse, ErrorResponse, TranscriptionResponse

logger = setup_logging()

router = APIRouter(prefix="/audio", tags=["audio"])

LiveSessionDep = Annotated[LiveSessionHandler, Depends(get_live_session_handler)]

FINISH_EVENT = "finish"


def _no_audio_error() -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=ErrorResponse(
            message="No audio available for this session", error_code="NO_AUDIO"
        ).model_dump(),
    )


@router.post("/stream", response_model=ChunkAcceptedResponse)
def receive_audio_chunk(
    audio: UploadFile,
    handler: LiveSessionDep,
    session_id: str = Form(..., min_length=1),
) -> ChunkAcceptedResponse:
    """Buffers one chunk of a live recording."""
    chunk = audio.file.read()
    try:
        chunk_count = handler.append_chunk(session_id, chunk)
    except Exception as e:
        logger.error(f"Error buffering chunk for session {session_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                message="Error buffering audio chunk", error_code="BUFFER_ERROR"
            ).model_dump(),
        )

    return ChunkAcceptedResponse(
        message="Chunk received", session_id=session_id, chunk_count=chunk_count
    )


@router.post("/finish", response_model=TranscriptionResponse)
def finish_recording(
    handler: LiveSessionDep,
    session_id: str = Form(..., min_length=1),
    mime_type: str | None = Form(None),
):
    """Transcribes everything streamed for the session."""
    try:
        result = handler.finish_session(session_id, mime_type)
    except Exception as e:
        logger.error(f"Error finishing session {session_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                message="Error processing live transcription",
                error_code="LIVE_TRANSCRIPTION_ERROR",
            ).model_dump(),
        )

    if result.status == SessionFinishStatus.NO_AUDIO:
        raise _no_audio_error()
    return result.transcription


@router.websocket("/ws/{session_id}")
async def stream_audio(
    websocket: WebSocket,
    session_id: str,
    handler: LiveSessionDep,
    mime_type: str | None = None,
):
    """
    Streams a live recording over a WebSocket.

    Binary frames are buffered as chunks and acknowledged. A "finish" text
    frame, or {"event": "finish"} as JSON, transcribes the session and sends
    the record back. The connection stays open for another recording.
    """
    await websocket.accept()
    logger.info("Live session connected", extra={"session_id": session_id})

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            chunk = message.get("bytes")
            if chunk is not None:
                await websocket.send_json(await _append(handler, session_id, chunk))
                continue

            event, event_mime_type = _parse_event(message.get("text"))
            if event != FINISH_EVENT:
                await websocket.send_json(
                    {
                        "type": "error",
                        "error_code": "UNKNOWN_EVENT",
                        "message": f"Unsupported event '{event}'",
                    }
                )
                continue

            await websocket.send_json(
                await _finish(handler, session_id, event_mime_type or mime_type)
            )
    except WebSocketDisconnect:
        pass

    logger.info("Live session disconnected", extra={"session_id": session_id})


async def _append(handler: LiveSessionHandler, session_id: str, chunk: bytes) -> dict:
    try:
        chunk_count = await run_in_threadpool(handler.append_chunk, session_id, chunk)
    except Exception as e:
        logger.error(f"Error buffering chunk for session {session_id}: {e}")
        return {
            "type": "error",
            "error_code": "BUFFER_ERROR",
            "message": "Error buffering audio chunk",
        }

    return {"type": "chunk_ack", "session_id": session_id, "chunk_count": chunk_count}


async def _finish(
    handler: LiveSessionHandler, session_id: str, mime_type: str | None
) -> dict:
    try:
        result = await run_in_threadpool(handler.finish_session, session_id, mime_type)
    except Exception as e:
        logger.error(f"Error finishing session {session_id}: {e}")
        return {
            "type": "error",
            "error_code": "LIVE_TRANSCRIPTION_ERROR",
            "message": "Error processing live transcription",
        }

    if result.status == SessionFinishStatus.NO_AUDIO:
        return {
            "type": "error",
            "error_code": "NO_AUDIO",
            "message": "No audio available for this session",
        }

    response = TranscriptionResponse.model_validate(result.transcription)
    return {"type": "transcription", **response.model_dump(mode="json")}


def _parse_event(text: str | None) -> tuple[str, str | None]:
    """Reads a control frame, either a bare event name or a JSON object."""
    text = (text or "").strip()
    if not text.startswith("{"):
        return text.lower(), None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return text, None
    if not isinstance(payload, dict):
        return text, None
    return str(payload.get("event", "")).lower(), payload.get("mime_type")
