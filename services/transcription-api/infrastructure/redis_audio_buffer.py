"""Redis implementation of the AudioBufferStore interface."""

import redis
from voice_common import AudioBufferError
from voice_common.logging import setup_logging

from infrastructure.interfaces import AudioBufferStore

logger = setup_logging()

KEY_PREFIX = "audio_chunks"


class RedisAudioBufferStore(AudioBufferStore):
    """
    Buffers chunks in Redis lists.

    Every mutation runs inside a MULTI/EXEC transaction, which Redis executes
    without interleaving commands from other clients.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self._client = client
        self._ttl_seconds = ttl_seconds

    def append(self, session_id: str, chunk: bytes) -> None:
        key = self._key(session_id)
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.rpush(key, chunk)
            pipe.expire(key, self._ttl_seconds)
            length, _ = pipe.execute()
            logger.info(
                "Audio chunk buffered",
                extra={
                    "session_id": session_id,
                    "chunk_size": len(chunk),
                    "chunk_count": length,
                },
            )
        except redis.RedisError as e:
            logger.exception("Redis append failed", extra={"session_id": session_id})
            raise AudioBufferError(session_id, "append", cause=e) from e

    def size_of(self, session_id: str) -> int:
        try:
            return int(self._client.llen(self._key(session_id)))
        except redis.RedisError as e:
            logger.exception("Redis size check failed", extra={"session_id": session_id})
            raise AudioBufferError(session_id, "size", cause=e) from e

    def take_all(self, session_id: str) -> list[bytes]:
        key = self._key(session_id)
        try:
            pipe = self._client.pipeline(transaction=True)
            pipe.lrange(key, 0, -1)
            pipe.delete(key)
            chunks, _ = pipe.execute()
        except redis.RedisError as e:
            logger.exception("Redis take failed", extra={"session_id": session_id})
            raise AudioBufferError(session_id, "take", cause=e) from e

        logger.info(
            "Audio buffer taken",
            extra={"session_id": session_id, "chunk_count": len(chunks)},
        )
        return list(chunks)

    def _key(self, session_id: str) -> str:
        return f"{KEY_PREFIX}:{session_id}"
