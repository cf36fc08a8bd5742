"""Gemini implementation of the TranscriptionProvider interface."""

import httpx
from google import genai
from google.genai import errors, types
from voice_common.logging import setup_logging

from domain.models import COULD_NOT_TRANSCRIBE, RecognitionResult
from exceptions import (
    MalformedProviderResponseError,
    ProviderConnectionError,
    ProviderTimeoutError,
    TranscriptionProviderError,
)
from infrastructure.interfaces import TranscriptionProvider

logger = setup_logging()

TRANSCRIPTION_PROMPT = (
    "Transcribe this audio to text in the language {language}.\n"
    "Return only the transcribed text, without any additional comments.\n"
    'If you cannot transcribe it, return "{fallback}".'
)


class GeminiTranscriber(TranscriptionProvider):
    """Transcribes audio by sending it inline to a Gemini model."""

    name = "gemini"

    def __init__(self, client: genai.Client, model_name: str):
        self._client = client
        self._model_name = model_name

    def recognize(
        self, audio_data: bytes, mime_type: str, language: str
    ) -> RecognitionResult:
        """
        Sends the instruction and the audio as inline data in one request.

        The SDK base64-encodes the inline bytes. Only the first candidate's
        first text part is used.

        Raises:
            ProviderTimeoutError: If the request exceeds the client timeout.
            ProviderConnectionError: If Gemini cannot be reached.
            MalformedProviderResponseError: If the response has no usable shape.
            TranscriptionProviderError: For API errors reported by Gemini.
        """
        prompt = TRANSCRIPTION_PROMPT.format(
            language=language, fallback=COULD_NOT_TRANSCRIBE
        )
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=[
                    prompt,
                    types.Part.from_bytes(data=audio_data, mime_type=mime_type),
                ],
            )
        except httpx.TimeoutException as e:
            logger.exception("Gemini request timed out")
            raise ProviderTimeoutError(self.name, "request timed out", cause=e) from e
        except httpx.TransportError as e:
            logger.exception("Gemini request could not be sent")
            raise ProviderConnectionError(self.name, str(e), cause=e) from e
        except errors.APIError as e:
            logger.exception("Gemini API call failed", extra={"status": e.code})
            raise TranscriptionProviderError(self.name, str(e), cause=e) from e
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise TranscriptionProviderError(self.name, str(e), cause=e) from e

        result = self._parse(response)
        logger.info(
            "Gemini transcription completed",
            extra={"model": self._model_name, "has_text": result.text is not None},
        )
        return result

    def _parse(self, response: types.GenerateContentResponse) -> RecognitionResult:
        """Extracts the first candidate's text, None when there are no candidates."""
        if response is None:
            raise MalformedProviderResponseError(self.name, "empty response body")

        candidates = response.candidates or []
        if not candidates:
            return RecognitionResult(text=None)

        content = candidates[0].content
        if content is None:
            raise MalformedProviderResponseError(self.name, "candidate has no content")

        parts = content.parts or []
        text = parts[0].text if parts else None
        return RecognitionResult(text=text.strip() if text else None)
