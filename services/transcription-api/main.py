"""FastAPI application entry point."""

import ddtrace.auto  # noqa: F401
from fastapi import FastAPI

from routes import audio_router, transcriptions_router

app = FastAPI(title="Voice Transcribe API")
app.include_router(transcriptions_router)
app.include_router(audio_router)
