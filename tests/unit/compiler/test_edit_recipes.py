"""Unit tests for editing recipes."""

from pathlib import Path

import pytest

from ffrecipe.compiler import compile_request
from ffrecipe.compiler.requests import (
    AddAudioRequest,
    ChangeSpeedRequest,
    ConcatRequest,
    CropRequest,
    ExtractFramesRequest,
    FlipRequest,
    LoopRequest,
    MuteRequest,
    ResizeRequest,
    ReverseRequest,
    RotateRequest,
    SetMetadataRequest,
    SplitRequest,
    ThumbnailGridRequest,
    TrimRequest,
)
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import (
    Duration,
    FlipDirection,
    GridLayout,
    MetadataField,
    ResizeTarget,
    RotateDegrees,
    SpeedFactor,
    SplitMode,
    Time,
)

IN = Path("/media/in.mp4")
OUT = Path("/media/out.mp4")


def only_args(plan):
    assert len(plan.invocations) == 1
    return list(plan.invocations[0].args)


class TestTrim:
    """Tests for the trim recipe."""

    def test_args(self, probe):
        request = TrimRequest(IN, OUT, Time.parse("0:10"), Time.parse("1:30"))

        assert only_args(compile_request(request, probe)) == [
            "-n",
            "-i",
            "/media/in.mp4",
            "-ss",
            "00:00:10",
            "-to",
            "00:01:30",
            "-c:v",
            "libx264",
            "-c:a",
            "aac",
            "/media/out.mp4",
        ]

    def test_end_must_follow_start(self, probe):
        request = TrimRequest(IN, OUT, Time.parse("30"), Time.parse("30"))
        with pytest.raises(PreconditionError, match="must be after"):
            compile_request(request, probe)

    def test_does_not_probe(self, probe):
        compile_request(TrimRequest(IN, OUT, Time(), Time(0, 0, 5)), probe)
        assert probe.calls == []


class TestTransforms:
    """Tests for resize, rotate and flip."""

    def test_resize(self, probe):
        request = ResizeRequest(IN, OUT, ResizeTarget.parse("720p"))
        assert only_args(compile_request(request, probe)) == [
            "-n",
            "-i",
            "/media/in.mp4",
            "-vf",
            "scale=1280:720",
            "-c:v",
            "libx264",
            "-c:a",
            "aac",
            "/media/out.mp4",
        ]

    @pytest.mark.parametrize(
        "degrees,vf",
        [("90", "transpose=1"), ("180", "transpose=2,transpose=2"), ("270", "transpose=2")],
    )
    def test_rotate(self, probe, degrees, vf):
        request = RotateRequest(IN, OUT, RotateDegrees.parse(degrees))
        args = only_args(compile_request(request, probe))
        assert args[3:7] == ["-vf", vf, "-c:a", "copy"]

    def test_flip(self, probe):
        request = FlipRequest(IN, OUT, FlipDirection.VERTICAL)
        assert only_args(compile_request(request, probe))[4] == "vflip"

    def test_crop_clamps_to_frame(self, probe):
        args = only_args(compile_request(CropRequest(IN, OUT, 640, 480), probe))
        assert args[4] == (
            "crop=min(640\\,iw):min(480\\,ih):(iw-min(640\\,iw))/2:(ih-min(480\\,ih))/2"
        )

    def test_crop_rejects_zero(self, probe):
        with pytest.raises(PreconditionError):
            compile_request(CropRequest(IN, OUT, 0, 480), probe)


class TestSpeed:
    """Tests for retiming recipes."""

    def test_speed_up(self, probe):
        request = ChangeSpeedRequest(IN, OUT, SpeedFactor.parse("2x"))
        args = only_args(compile_request(request, probe))

        assert args[:5] == [
            "-n",
            "-i",
            "/media/in.mp4",
            "-filter_complex",
            "[0:v]setpts=PTS/2[v];[0:a]atempo=2.000000[a]",
        ]
        assert args[5:] == [
            "-map",
            "[v]",
            "-map",
            "[a]",
            "-c:v",
            "libx264",
            "-c:a",
            "aac",
            "/media/out.mp4",
        ]

    def test_large_factor_chains_atempo(self, probe):
        request = ChangeSpeedRequest(IN, OUT, SpeedFactor.parse("9x"))
        graph = only_args(compile_request(request, probe))[4]
        assert graph == (
            "[0:v]setpts=PTS/9[v];"
            "[0:a]atempo=2.0,atempo=2.0,atempo=2.0,atempo=1.125000[a]"
        )

    def test_slow_down(self, probe):
        request = ChangeSpeedRequest(IN, OUT, SpeedFactor.parse("2x"), slow_down=True)
        graph = only_args(compile_request(request, probe))[4]
        assert graph == "[0:v]setpts=PTS*2[v];[0:a]atempo=0.500000[a]"

    def test_reverse(self, probe):
        graph = only_args(compile_request(ReverseRequest(IN, OUT), probe))[4]
        assert graph == "[0:v]reverse[v];[0:a]areverse[a]"


class TestStreamEdits:
    """Tests for mute, add-audio and metadata recipes."""

    def test_mute_copies_video(self, probe):
        assert only_args(compile_request(MuteRequest(IN, OUT), probe)) == [
            "-n",
            "-i",
            "/media/in.mp4",
            "-c:v",
            "copy",
            "-an",
            "/media/out.mp4",
        ]

    def test_add_audio(self, probe):
        request = AddAudioRequest(IN, Path("/media/music.mp3"), OUT)
        args = only_args(compile_request(request, probe))
        assert args[args.index("-map") : args.index("-map") + 4] == [
            "-map",
            "0:v:0",
            "-map",
            "1:a:0",
        ]
        assert "-shortest" in args

    def test_set_metadata(self, probe):
        request = SetMetadataRequest(IN, OUT, MetadataField.TITLE, "Holiday")
        args = only_args(compile_request(request, probe))
        assert args[3:7] == ["-metadata", "title=Holiday", "-c", "copy"]


class TestConcat:
    """Tests for concat and loop."""

    def test_concat_writes_list(self, probe):
        request = ConcatRequest((IN, Path("/media/b.mp4")), OUT)
        plan = compile_request(request, probe)

        assert only_args(plan) == [
            "-n",
            "-f",
            "concat",
            "-safe",
            "0",
            "-i",
            "/media/concat_list.txt",
            "-c",
            "copy",
            "/media/out.mp4",
        ]
        (aux,) = plan.auxiliary
        assert aux.path == Path("/media/concat_list.txt")
        assert aux.content == "file '/media/in.mp4'\nfile '/media/b.mp4'\n"

    def test_concat_escapes_quotes(self, probe):
        request = ConcatRequest((Path("/media/it's.mp4"), IN), OUT)
        content = compile_request(request, probe).auxiliary[0].content
        assert content.startswith("file '/media/it\\'s.mp4'\n")

    def test_concat_transcodes_mixed_containers(self, probe):
        request = ConcatRequest((Path("/media/a.webm"), IN), OUT)
        args = only_args(compile_request(request, probe))
        assert args[7:13] == ["-c:v", "libx264", "-pix_fmt", "yuv420p", "-c:a", "aac"]

    def test_concat_needs_two(self, probe):
        with pytest.raises(PreconditionError, match="at least 2"):
            compile_request(ConcatRequest((IN,), OUT), probe)

    def test_loop_repeats_input(self, probe):
        plan = compile_request(LoopRequest(IN, OUT, times=3), probe)
        assert plan.auxiliary[0].content == "file '/media/in.mp4'\n" * 3

    def test_loop_needs_one(self, probe):
        with pytest.raises(PreconditionError):
            compile_request(LoopRequest(IN, OUT, times=0), probe)


class TestSegmenting:
    """Tests for split and frame extraction."""

    def test_split_every(self, make_probe):
        probe = make_probe(durations={IN: 25.0})
        request = SplitRequest(IN, Path("/media/parts"), SplitMode.parse("every 10s"))
        plan = compile_request(request, probe)

        assert probe.calls == [IN]
        assert [p.name for p in plan.outputs] == [
            "segment_001.mp4",
            "segment_002.mp4",
            "segment_003.mp4",
        ]
        last = list(plan.invocations[2].args)
        assert last[3:7] == ["-ss", "20.000", "-t", "5.000"]

    def test_split_parts(self, make_probe):
        probe = make_probe(durations={IN: 30.0})
        request = SplitRequest(IN, Path("/media/parts"), SplitMode(parts=3))
        plan = compile_request(request, probe)

        assert [p.name for p in plan.outputs] == [
            "part_001_of_003.mp4",
            "part_002_of_003.mp4",
            "part_003_of_003.mp4",
        ]
        assert list(plan.invocations[1].args)[3:7] == ["-ss", "10.000", "-t", "10.000"]

    def test_split_zero_interval(self, probe):
        request = SplitRequest(IN, Path("/media/parts"), SplitMode(every=Duration(0)))
        with pytest.raises(PreconditionError):
            compile_request(request, probe)

    def test_extract_frames(self, make_probe):
        probe = make_probe(durations={IN: 5.0})
        request = ExtractFramesRequest(IN, Path("/media/frames"), Duration(2.0))
        plan = compile_request(request, probe)

        assert [p.name for p in plan.outputs] == [
            "frame_00001.jpg",
            "frame_00002.jpg",
            "frame_00003.jpg",
        ]
        assert list(plan.invocations[1].args)[:3] == ["-n", "-ss", "2.000"]

    def test_thumbnail_grid(self, probe):
        request = ThumbnailGridRequest(IN, Path("/media/grid.jpg"), GridLayout(2, 2))
        args = only_args(compile_request(request, probe))
        assert args[4] == "select='not(mod(n\\,4))',scale=320:-1,tile=2x2"
