"""Playback duration estimation for raw audio bytes."""

import io
import wave

from voice_common.logging import setup_logging

logger = setup_logging()

# 16 kHz * 2 bytes per sample * 1 channel
FALLBACK_BYTES_PER_SECOND = 32000.0


class DurationEstimator:
    """Derives audio duration from the container header, or from the byte size."""

    def estimate(self, audio_data: bytes, mime_type: str | None = None) -> float:
        """
        Estimates playback duration in seconds.

        Reads frame count and frame rate from the RIFF/WAVE header when one is
        present. Anything that cannot be parsed falls back to an approximation
        calibrated for 16 kHz, 16-bit mono PCM, so the result is never
        authoritative for compressed formats.

        Args:
            audio_data: The complete audio stream.
            mime_type: Declared content type, used only for log context.

        Returns:
            Duration in seconds, never negative.
        """
        try:
            with wave.open(io.BytesIO(audio_data), "rb") as reader:
                frames = reader.getnframes()
                frame_rate = reader.getframerate()
        except Exception as e:
            logger.info(
                "Audio header not parseable, estimating duration from size",
                extra={"mime_type": mime_type, "size": len(audio_data), "reason": str(e)},
            )
            return self._from_size(audio_data)

        if frames < 0 or frame_rate <= 0:
            return self._from_size(audio_data)

        return frames / float(frame_rate)

    def _from_size(self, audio_data: bytes) -> float:
        return len(audio_data) / FALLBACK_BYTES_PER_SECOND
