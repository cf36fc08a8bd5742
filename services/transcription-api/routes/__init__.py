"""API routers."""

from .audio import router as audio_router
from .transcriptions import router as transcriptions_router

__all__ = ["audio_router", "transcriptions_router"]
