import pytest

from domain import AudioReassembler, DurationEstimator, normalize_mime_type
from stubs import make_wav


def test_reassemble_concatenates_chunks_in_order():
    chunks = [b"RIFF", b"", b"\x00\x01\x02", b"tail"]

    audio = AudioReassembler().reassemble(chunks, "audio/wav", "live.wav")

    assert audio.data == b"RIFF\x00\x01\x02tail"
    assert audio.size == sum(len(c) for c in chunks)
    assert audio.mime_type == "audio/wav"
    assert audio.file_name == "live.wav"


def test_reassemble_empty_chunk_list_yields_no_bytes():
    audio = AudioReassembler().reassemble([], "audio/wav", "live.wav")

    assert audio.data == b""
    assert audio.size == 0


def test_duration_from_wav_header():
    assert DurationEstimator().estimate(make_wav(16000, 16000), "audio/wav") == 1.0


def test_duration_from_wav_header_other_rate():
    assert DurationEstimator().estimate(make_wav(22050, 44100)) == pytest.approx(0.5)


def test_duration_falls_back_to_size_for_unparseable_bytes():
    assert DurationEstimator().estimate(b"\x07" * 64000, "audio/mp3") == 2.0


@pytest.mark.parametrize("audio_data", [b"", b"RI", b"RIFF\x10\x00\x00\x00WAVEjunk"])
def test_duration_never_raises_on_truncated_input(audio_data):
    duration = DurationEstimator().estimate(audio_data, "audio/wav")

    assert duration == len(audio_data) / 32000.0


@pytest.mark.parametrize(
    "declared, expected",
    [
        ("audio/MPEG", "audio/mp3"),
        ("audio/mpeg", "audio/mp3"),
        ("audio/mp3", "audio/mp3"),
        ("audio/wave", "audio/wav"),
        ("AUDIO/WAV", "audio/wav"),
        ("audio/flac", "audio/flac"),
        ("audio/ogg", "audio/ogg"),
        ("audio/webm", "audio/webm"),
        ("audio/unknown-codec", "audio/wav"),
        ("", "audio/wav"),
        (None, "audio/wav"),
    ],
)
def test_normalize_mime_type(declared, expected):
    assert normalize_mime_type(declared) == expected
