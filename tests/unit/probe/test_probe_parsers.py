"""Unit tests for ffprobe output parsing."""

import pytest

from ffrecipe.probe.interface import MediaInfo
from ffrecipe.probe.parsers import (
    clamp_duration,
    parse_duration,
    parse_ffprobe_output,
    parse_frame_rate,
    parse_int,
)


@pytest.fixture
def ffprobe_document() -> dict:
    return {
        "streams": [
            {
                "codec_type": "video",
                "codec_name": "h264",
                "width": 1920,
                "height": 1080,
                "r_frame_rate": "30000/1001",
                "bit_rate": "4500000",
                "duration": "75.480000",
            },
            {"codec_type": "audio", "codec_name": "aac", "bit_rate": "128000"},
        ],
        "format": {"duration": "75.500000", "bit_rate": "4700000", "size": "44000000"},
    }


class TestScalarParsers:
    """Tests for field-level parsers."""

    @pytest.mark.parametrize(
        "value,expected", [("42", 42), (7, 7), (None, 0), ("N/A", 0), ([], 0)]
    )
    def test_parse_int(self, value, expected):
        assert parse_int(value) == expected

    def test_parse_duration(self) -> None:
        assert parse_duration("12.5") == 12.5
        assert parse_duration("N/A") is None
        assert parse_duration(None) is None

    @pytest.mark.parametrize(
        "value,expected",
        [("30/1", 30.0), ("25", 25.0), ("0/0", 0.0), ("", 0.0), (None, 0.0), ("x/y", 0.0)],
    )
    def test_parse_frame_rate(self, value, expected):
        assert parse_frame_rate(value) == expected

    def test_ntsc_frame_rate(self) -> None:
        assert parse_frame_rate("30000/1001") == pytest.approx(29.97, abs=0.001)

    def test_clamp_duration(self) -> None:
        assert clamp_duration(0.0) == 0.01
        assert clamp_duration(3.0) == 3.0


class TestParseFfprobeOutput:
    """Tests for parse_ffprobe_output."""

    def test_full_document(self, ffprobe_document: dict) -> None:
        info = parse_ffprobe_output(ffprobe_document)

        assert info == MediaInfo(
            duration=75.5,
            width=1920,
            height=1080,
            frame_rate=pytest.approx(29.97, abs=0.001),
            video_codec="h264",
            video_bitrate=4_500_000,
            audio_codec="aac",
            audio_bitrate=128_000,
            total_bitrate=4_700_000,
            file_size=44_000_000,
        )
        assert info.has_audio

    def test_duration_falls_back_to_video_stream(self, ffprobe_document: dict) -> None:
        del ffprobe_document["format"]["duration"]
        assert parse_ffprobe_output(ffprobe_document).duration == 75.48

    def test_no_audio_stream(self, ffprobe_document: dict) -> None:
        ffprobe_document["streams"].pop()
        info = parse_ffprobe_output(ffprobe_document)
        assert info.audio_codec == "none"
        assert not info.has_audio

    def test_audio_only(self) -> None:
        info = parse_ffprobe_output(
            {
                "streams": [{"codec_type": "audio", "codec_name": "mp3"}],
                "format": {"duration": "180.0"},
            }
        )
        assert info.video_codec == "unknown"
        assert (info.width, info.height, info.frame_rate) == (0, 0, 0.0)

    def test_missing_format(self) -> None:
        with pytest.raises(KeyError):
            parse_ffprobe_output({"streams": []})
