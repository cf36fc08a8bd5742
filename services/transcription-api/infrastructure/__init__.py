"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_transcriber import GeminiTranscriber
from .memory_audio_buffer import InMemoryAudioBufferStore
from .redis_audio_buffer import RedisAudioBufferStore

__all__ = [
    "AssemblyAITranscriber",
    "GeminiTranscriber",
    "InMemoryAudioBufferStore",
    "RedisAudioBufferStore",
]
