"""In-process implementation of the AudioBufferStore interface."""

import threading
import time

from infrastructure.interfaces import AudioBufferStore


class _SessionBuffer:
    def __init__(self, now: float):
        self.lock = threading.Lock()
        self.chunks: list[bytes] = []
        self.closed = False
        self.touched = now


class InMemoryAudioBufferStore(AudioBufferStore):
    """
    Keeps chunks in process memory with one lock per session.

    take_all detaches the session's buffer from the registry and marks it
    closed under its lock. An append that grabbed the detached buffer just
    before that sees it closed and retries against a fresh one.

    Sessions with no append for ttl_seconds are dropped, mirroring the key
    expiry of the Redis store.
    """

    def __init__(self, ttl_seconds: float | None = 3600, clock=time.monotonic):
        self._sessions: dict[str, _SessionBuffer] = {}
        self._registry_lock = threading.Lock()
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def append(self, session_id: str, chunk: bytes) -> None:
        while True:
            with self._registry_lock:
                now = self._clock()
                self._evict_idle(now)
                buffer = self._sessions.get(session_id)
                if buffer is None:
                    buffer = _SessionBuffer(now)
                    self._sessions[session_id] = buffer
            with buffer.lock:
                if buffer.closed:
                    continue
                buffer.chunks.append(bytes(chunk))
                buffer.touched = now
                return

    def size_of(self, session_id: str) -> int:
        with self._registry_lock:
            self._evict_idle(self._clock())
            buffer = self._sessions.get(session_id)
        if buffer is None:
            return 0
        with buffer.lock:
            return 0 if buffer.closed else len(buffer.chunks)

    def take_all(self, session_id: str) -> list[bytes]:
        with self._registry_lock:
            self._evict_idle(self._clock())
            buffer = self._sessions.pop(session_id, None)
        if buffer is None:
            return []
        with buffer.lock:
            buffer.closed = True
            chunks, buffer.chunks = buffer.chunks, []
        return chunks

    def _evict_idle(self, now: float) -> None:
        """Caller holds the registry lock."""
        if self._ttl_seconds is None:
            return
        expired = [
            session_id
            for session_id, buffer in self._sessions.items()
            if now - buffer.touched >= self._ttl_seconds
        ]
        for session_id in expired:
            buffer = self._sessions.pop(session_id)
            with buffer.lock:
                buffer.closed = True
                buffer.chunks = []
