"""Joins buffered audio chunks back into a single stream."""

from collections.abc import Sequence

from .models import ReassembledAudio


class AudioReassembler:
    """Concatenates ordered chunks without padding or truncation."""

    def reassemble(
        self, chunks: Sequence[bytes], mime_type: str, file_name: str
    ) -> ReassembledAudio:
        return ReassembledAudio(
            data=b"".join(chunks),
            mime_type=mime_type,
            file_name=file_name,
        )
