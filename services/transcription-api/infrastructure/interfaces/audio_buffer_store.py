"""Abstract interface for staging streamed audio chunks."""

from abc import ABC, abstractmethod


class AudioBufferStore(ABC):
    """
    Ordered chunk lists keyed by session id.

    Mutations for the same session are serialized: a take_all never sees a
    partially appended chunk, and an append racing a take_all lands either
    wholly before it or wholly after it.
    """

    @abstractmethod
    def append(self, session_id: str, chunk: bytes) -> None:
        """
        Appends a chunk to the end of the session's buffer.

        Raises:
            AudioBufferError: If the backing store fails.
        """
        pass

    @abstractmethod
    def size_of(self, session_id: str) -> int:
        """Returns the number of buffered chunks, 0 for unknown sessions."""
        pass

    @abstractmethod
    def take_all(self, session_id: str) -> list[bytes]:
        """
        Returns the session's chunks in append order and removes the buffer.

        Raises:
            AudioBufferError: If the backing store fails.
        """
        pass
