"""Mime type normalization for provider requests."""

DEFAULT_MIME_TYPE = "audio/wav"

_SUPPORTED_MIME_TYPES = {
    "audio/wav": "audio/wav",
    "audio/wave": "audio/wav",
    "audio/mp3": "audio/mp3",
    "audio/mpeg": "audio/mp3",
    "audio/flac": "audio/flac",
    "audio/ogg": "audio/ogg",
    "audio/webm": "audio/webm",
}


def normalize_mime_type(content_type: str | None) -> str:
    """Maps a declared content type onto one the providers accept, defaulting to WAV."""
    if not content_type:
        return DEFAULT_MIME_TYPE
    return _SUPPORTED_MIME_TYPES.get(content_type.strip().lower(), DEFAULT_MIME_TYPE)
