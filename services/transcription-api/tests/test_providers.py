from types import SimpleNamespace
from unittest.mock import MagicMock

import assemblyai as aai
import httpx
import pytest
from google.genai import errors, types
from voice_common.db_models import TranscriptionOutcome

from exceptions import (
    MalformedProviderResponseError,
    ProviderConnectionError,
    ProviderTimeoutError,
    TranscriptionProviderError,
)
from infrastructure import AssemblyAITranscriber, GeminiTranscriber


def _gemini(response=None, error=None):
    client = MagicMock()
    if error is not None:
        client.models.generate_content.side_effect = error
    else:
        client.models.generate_content.return_value = response
    return GeminiTranscriber(client, "gemini-test"), client


def _response(*texts):
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(parts=[types.Part(text=t) for t in texts]))
        ]
    )


def test_gemini_sends_prompt_and_inline_audio():
    transcriber, client = _gemini(_response("  bom dia  "))

    result = transcriber.recognize(b"audio-bytes", "audio/mp3", "pt-BR")

    assert result.text == "bom dia"
    assert result.confidence is None
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    prompt, audio_part = kwargs["contents"]
    assert "pt-BR" in prompt
    assert "Could not transcribe the audio" in prompt
    assert audio_part.inline_data.mime_type == "audio/mp3"
    assert audio_part.inline_data.data == b"audio-bytes"


def test_gemini_uses_first_candidate_first_part():
    transcriber, _ = _gemini(_response("first", "second"))

    assert transcriber.recognize(b"x", "audio/wav", "pt-BR").text == "first"


def test_gemini_without_candidates_returns_no_text():
    transcriber, _ = _gemini(types.GenerateContentResponse(candidates=[]))

    assert transcriber.recognize(b"x", "audio/wav", "pt-BR").text is None


def test_gemini_candidate_without_content_is_malformed():
    transcriber, _ = _gemini(
        types.GenerateContentResponse(candidates=[types.Candidate(content=None)])
    )

    with pytest.raises(MalformedProviderResponseError) as exc_info:
        transcriber.recognize(b"x", "audio/wav", "pt-BR")

    assert exc_info.value.outcome == TranscriptionOutcome.MALFORMED_RESPONSE


@pytest.mark.parametrize(
    "error, expected",
    [
        (httpx.ReadTimeout("timed out"), ProviderTimeoutError),
        (httpx.ConnectError("connection refused"), ProviderConnectionError),
        (
            errors.ClientError(
                429,
                {"error": {"code": 429, "message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}},
            ),
            TranscriptionProviderError,
        ),
        (ValueError("unexpected"), TranscriptionProviderError),
    ],
)
def test_gemini_errors_are_classified(error, expected):
    transcriber, _ = _gemini(error=error)

    with pytest.raises(expected) as exc_info:
        transcriber.recognize(b"x", "audio/wav", "pt-BR")

    assert exc_info.value.provider == "gemini"
    assert exc_info.value.cause is error


def _assemblyai(transcript=None, error=None):
    transcriber = MagicMock()
    if error is not None:
        transcriber.transcribe.side_effect = error
    else:
        transcriber.transcribe.return_value = transcript
    return AssemblyAITranscriber(transcriber), transcriber


def test_assemblyai_returns_text_and_confidence():
    transcript = SimpleNamespace(
        status=aai.TranscriptStatus.completed, text=" olá ", confidence=0.87, error=None
    )
    provider, transcriber = _assemblyai(transcript)

    result = provider.recognize(b"audio", "audio/flac", "pt-BR")

    assert result.text == "olá"
    assert result.confidence == 0.87
    path = transcriber.transcribe.call_args.args[0]
    assert path.endswith(".flac")
    assert transcriber.transcribe.call_args.kwargs["config"].language_code == "pt"


def test_assemblyai_empty_text_returns_no_text():
    transcript = SimpleNamespace(
        status=aai.TranscriptStatus.completed, text="", confidence=0.1, error=None
    )
    provider, _ = _assemblyai(transcript)

    result = provider.recognize(b"audio", "audio/wav", "pt-BR")

    assert result.text is None
    assert result.confidence is None


def test_assemblyai_error_status_raises():
    transcript = SimpleNamespace(
        status=aai.TranscriptStatus.error, text=None, confidence=None, error="bad audio"
    )
    provider, _ = _assemblyai(transcript)

    with pytest.raises(TranscriptionProviderError, match="bad audio"):
        provider.recognize(b"audio", "audio/wav", "pt-BR")


def test_assemblyai_timeout_is_classified():
    provider, _ = _assemblyai(error=httpx.ReadTimeout("timed out"))

    with pytest.raises(ProviderTimeoutError):
        provider.recognize(b"audio", "audio/wav", "pt-BR")


def test_assemblyai_polling_is_bounded_by_timeout():
    transcriber = MagicMock()
    transcriber.transcribe.side_effect = aai.TranscriptError(
        "Transcript abc is still processing after polling for 0 seconds"
    )
    provider = AssemblyAITranscriber(transcriber, timeout_seconds=0)

    with pytest.raises(ProviderTimeoutError) as exc_info:
        provider.recognize(b"audio", "audio/wav", "pt-BR")

    assert exc_info.value.outcome == TranscriptionOutcome.TIMEOUT
    assert transcriber.transcribe.call_args.kwargs["poll_timeout"] == 0


def test_assemblyai_early_transcript_error_is_provider_error():
    transcriber = MagicMock()
    transcriber.transcribe.side_effect = aai.TranscriptError("upload failed")
    provider = AssemblyAITranscriber(transcriber, timeout_seconds=30)

    with pytest.raises(TranscriptionProviderError) as exc_info:
        provider.recognize(b"audio", "audio/wav", "pt-BR")

    assert exc_info.value.outcome == TranscriptionOutcome.PROVIDER_ERROR
    assert transcriber.transcribe.call_args.kwargs["poll_timeout"] == 30
