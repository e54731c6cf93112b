"""Unit tests for audio recipes."""

from pathlib import Path

import pytest

from ffrecipe.compiler import compile_request
from ffrecipe.compiler.requests import (
    AdjustVolumeRequest,
    AudioSpeedRequest,
    EqualizerRequest,
    ExtractAudioRequest,
    FadeRequest,
    MixAudioRequest,
    NormalizeRequest,
    SyncAudioRequest,
    VisualizeRequest,
)
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import (
    AudioFormat,
    AudioSyncDirection,
    Duration,
    SpeedFactor,
    Time,
    VisualizationStyle,
    VolumeAdjustment,
)

IN = Path("/media/in.mp4")
OUT = Path("/media/out.mp4")


def only_args(plan):
    assert len(plan.invocations) == 1
    return list(plan.invocations[0].args)


class TestExtractAudio:
    """Tests for the extract-audio recipe."""

    def test_whole_file(self, probe):
        request = ExtractAudioRequest(IN, Path("/media/in_audio.mp3"), AudioFormat.MP3)
        plan = compile_request(request, probe)

        assert only_args(plan) == [
            "-n",
            "-i",
            "/media/in.mp4",
            "-vn",
            "-c:a",
            "libmp3lame",
            "-q:a",
            "2",
            "/media/in_audio.mp3",
        ]

    def test_extension_follows_format(self, probe):
        request = ExtractAudioRequest(IN, Path("/media/in_audio.mp4"), AudioFormat.WAV)
        plan = compile_request(request, probe)
        assert plan.outputs == (Path("/media/in_audio.wav"),)

    def test_range(self, probe):
        request = ExtractAudioRequest(
            IN,
            Path("/media/a.m4a"),
            AudioFormat.M4A,
            start=Time.parse("0:10"),
            end=Time.parse("0:40"),
        )
        assert only_args(compile_request(request, probe)) == [
            "-n",
            "-ss",
            "00:00:10",
            "-i",
            "/media/in.mp4",
            "-t",
            "30",
            "-vn",
            "-c:a",
            "aac",
            "-b:a",
            "192k",
            "/media/a.m4a",
        ]

    def test_half_range_rejected(self, probe):
        request = ExtractAudioRequest(IN, Path("/media/a.mp3"), start=Time.parse("5"))
        with pytest.raises(PreconditionError, match="both a start and an end"):
            compile_request(request, probe)

    def test_empty_range_rejected(self, probe):
        request = ExtractAudioRequest(
            IN, Path("/media/a.mp3"), start=Time.parse("10"), end=Time.parse("5")
        )
        with pytest.raises(PreconditionError, match="must be after"):
            compile_request(request, probe)


class TestAudioFilters:
    """Tests for recipes that filter the audio stream and copy video."""

    def test_volume(self, probe):
        request = AdjustVolumeRequest(IN, OUT, VolumeAdjustment.parse("50%"))
        assert only_args(compile_request(request, probe)) == [
            "-n",
            "-i",
            "/media/in.mp4",
            "-af",
            "volume=0.500000",
            "-c:v",
            "copy",
            "-c:a",
            "aac",
            "/media/out.mp4",
        ]

    def test_volume_transcodes_incompatible_video(self, probe):
        request = AdjustVolumeRequest(Path("/media/in.webm"), OUT, VolumeAdjustment(decibels=0))
        args = only_args(compile_request(request, probe))
        assert args[4:7] == ["volume=1.000000", "-c:v", "libx264"]

    def test_normalize(self, probe):
        args = only_args(compile_request(NormalizeRequest(IN, OUT), probe))
        assert args[4] == "loudnorm=I=-16:TP=-1.5:LRA=11"

    def test_sync_delay(self, probe):
        request = SyncAudioRequest(IN, OUT, AudioSyncDirection.DELAY, Duration(0.5))
        args = only_args(compile_request(request, probe))
        assert args[:5] == ["-n", "-i", "/media/in.mp4", "-af", "adelay=500|500"]

    def test_sync_advance(self, probe):
        request = SyncAudioRequest(IN, OUT, AudioSyncDirection.ADVANCE, Duration(1.5))
        args = only_args(compile_request(request, probe))
        assert args[:6] == ["-n", "-itsoffset", "1.5", "-i", "/media/in.mp4", "-af"]
        assert args[6] == "anull"

    def test_equalizer_clamps_gain(self, probe):
        request = EqualizerRequest(IN, OUT, bass=1000, treble=-40)
        args = only_args(compile_request(request, probe))
        assert args[4] == (
            "equalizer=f=100:width_type=h:width=100:g=20,"
            "equalizer=f=10000:width_type=h:width=5000:g=-2"
        )

    def test_equalizer_without_bands(self, probe):
        assert only_args(compile_request(EqualizerRequest(IN, OUT), probe))[4] == "anull"

    def test_audio_speed_keeps_pitch(self, probe):
        request = AudioSpeedRequest(IN, OUT, SpeedFactor(1.5))
        assert only_args(compile_request(request, probe))[4] == "atempo=1.5"


class TestFade:
    """Tests for the audio fade recipe."""

    def test_fade_in_only_does_not_probe(self, probe):
        request = FadeRequest(IN, OUT, fade_in=Duration(2.0))
        args = only_args(compile_request(request, probe))
        assert args[4] == "afade=t=in:st=0:d=2"
        assert probe.calls == []

    def test_fade_out_placed_at_end(self, make_probe):
        probe = make_probe(durations={IN: 30.0})
        request = FadeRequest(IN, OUT, fade_in=Duration(1.0), fade_out=Duration(3.0))
        args = only_args(compile_request(request, probe))
        assert args[4] == "afade=t=in:st=0:d=1,afade=t=out:st=27:d=3"

    def test_fade_out_longer_than_input(self, make_probe):
        probe = make_probe(durations={IN: 2.0})
        request = FadeRequest(IN, OUT, fade_out=Duration(5.0))
        assert only_args(compile_request(request, probe))[4] == "afade=t=out:st=0:d=2"

    def test_no_fade_rejected(self, probe):
        with pytest.raises(PreconditionError, match="At least one fade"):
            compile_request(FadeRequest(IN, OUT), probe)


class TestMixAndVisualize:
    """Tests for two-input mixing and audio visualization."""

    def test_mix(self, probe):
        request = MixAudioRequest(IN, Path("/media/b.mp3"), Path("/media/mix.m4a"))
        args = only_args(compile_request(request, probe))
        assert args[5:9] == [
            "-filter_complex",
            "[0:a][1:a]amix=inputs=2:duration=longest[a]",
            "-map",
            "[a]",
        ]
        assert args[9:13] == ["-c:a", "aac", "-b:a", "192k"]

    def test_visualize_spectrum(self, probe):
        request = VisualizeRequest(
            Path("/media/song.mp3"), OUT, VisualizationStyle.SPECTRUM
        )
        args = only_args(compile_request(request, probe))
        assert args[4] == "[0:a]showspectrum=s=1280x720:color=intensity:slide=scroll[v]"
