"""Editing recipes: cutting, retiming, orientation and file-level fixes."""

from __future__ import annotations

from pathlib import Path

from ffrecipe.compiler.codecs import (
    resolve_audio_codec,
    resolve_video_codec,
    stream_codec_args,
    video_copy_args,
)
from ffrecipe.compiler.graph import FilterGraph
from ffrecipe.compiler.invocation import CompiledPlan, Invocation, ffmpeg
from ffrecipe.compiler.recipes._common import concat_list, filter_encode, single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    AddAudioRequest,
    ChangeSpeedRequest,
    ConcatRequest,
    CropRequest,
    ExtractFramesRequest,
    FixRotationRequest,
    FlipRequest,
    InterpolateRequest,
    LoopRequest,
    MirrorRequest,
    MuteRequest,
    PreviewRequest,
    RepairRequest,
    ResizeRequest,
    ReverseRequest,
    RotateRequest,
    SetFpsRequest,
    SetMetadataRequest,
    SplitRequest,
    ThumbnailGridRequest,
    ThumbnailRequest,
    TrimRequest,
)
from ffrecipe.compiler.tempo import atempo_chain
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import FlipDirection, MirrorDirection
from ffrecipe.values._common import format_number

_ROTATE_FILTERS = {
    0: "null",
    90: "transpose=1",
    180: "transpose=2,transpose=2",
    270: "transpose=2",
}

_SPLIT_SEGMENT_NAME = "segment_{:03d}.mp4"
_SPLIT_PART_NAME = "part_{:03d}_of_{:03d}.mp4"
_FRAME_NAME = "frame_{:05d}.jpg"


@recipe(TrimRequest)
def trim(request: TrimRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.end.to_seconds() <= request.start.to_seconds():
        raise PreconditionError(
            f"Trim end {request.end} must be after start {request.start}"
        )
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-ss",
        request.start.to_ffmpeg(),
        "-to",
        request.end.to_ffmpeg(),
        "-c:v",
        "libx264",
        "-c:a",
        "aac",
        str(request.output),
    ]
    return single(cmd, request.output, "trim")


@recipe(ResizeRequest)
def resize(request: ResizeRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        request.target.to_ffmpeg_scale(),
        ["-c:v", "libx264", "-c:a", "aac"],
        f"resize to {request.target}",
    )


def _av_graph_plan(
    ctx: RecipeContext, input_path: Path, output: Path, graph: FilterGraph, description: str
) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(input_path),
        "-filter_complex",
        graph.render(mapped=["v", "a"]),
        "-map",
        "[v]",
        "-map",
        "[a]",
        "-c:v",
        "libx264",
        "-c:a",
        "aac",
        str(output),
    ]
    return single(cmd, output, description)


@recipe(ChangeSpeedRequest)
def change_speed(request: ChangeSpeedRequest, ctx: RecipeContext) -> CompiledPlan:
    """Retime video and audio together.

    Speeding up divides presentation timestamps by the factor; slowing down
    multiplies them and plays audio at the reciprocal tempo.
    """
    factor = request.factor.factor
    if request.slow_down:
        video_filter = f"setpts=PTS*{format_number(factor)}"
        audio_filter = atempo_chain(1.0 / factor)
        description = f"slow down {request.factor}"
    else:
        video_filter = f"setpts=PTS/{format_number(factor)}"
        audio_filter = atempo_chain(factor)
        description = f"speed up {request.factor}"

    graph = FilterGraph()
    graph.chain(video_filter, inputs=["0:v"], outputs=["v"])
    graph.chain(audio_filter, inputs=["0:a"], outputs=["a"])
    return _av_graph_plan(ctx, request.input, request.output, graph, description)


@recipe(ReverseRequest)
def reverse(request: ReverseRequest, ctx: RecipeContext) -> CompiledPlan:
    graph = FilterGraph()
    graph.chain("reverse", inputs=["0:v"], outputs=["v"])
    graph.chain("areverse", inputs=["0:a"], outputs=["a"])
    return _av_graph_plan(ctx, request.input, request.output, graph, "reverse")


@recipe(MuteRequest)
def mute(request: MuteRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-c:v",
        resolve_video_codec(request.input, request.output),
        "-an",
        str(request.output),
    ]
    return single(cmd, request.output, "mute")


@recipe(RotateRequest)
def rotate(request: RotateRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        _ROTATE_FILTERS[request.degrees.degrees],
        ["-c:a", "copy"],
        f"rotate {request.degrees.degrees}",
    )


@recipe(FlipRequest)
def flip(request: FlipRequest, ctx: RecipeContext) -> CompiledPlan:
    vf = "hflip" if request.direction is FlipDirection.HORIZONTAL else "vflip"
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        vf,
        ["-c:v", "libx264", "-c:a", "aac"],
        f"flip {request.direction.value}",
    )


@recipe(MirrorRequest)
def mirror(request: MirrorRequest, ctx: RecipeContext) -> CompiledPlan:
    vf = "hflip" if request.direction is MirrorDirection.HORIZONTAL else "vflip"
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        vf,
        ["-c:v", "libx264", "-c:a", "copy"],
        f"mirror {request.direction.value}",
    )


@recipe(CropRequest)
def crop(request: CropRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.width <= 0 or request.height <= 0:
        raise PreconditionError("Crop width and height must be greater than 0")
    # Clamp to the source so the crop never exceeds the frame
    w = f"min({request.width}\\,iw)"
    h = f"min({request.height}\\,ih)"
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"crop={w}:{h}:(iw-{w})/2:(ih-{h})/2",
        ["-c:v", "libx264", "-c:a", resolve_audio_codec(request.input, request.output)],
        f"crop to {request.width}x{request.height}",
    )


@recipe(SetFpsRequest)
def set_fps(request: SetFpsRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.fps <= 0:
        raise PreconditionError("Frame rate must be greater than 0")
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"fps={request.fps}",
        ["-c:v", "libx264", "-c:a", "aac"],
        f"set fps {request.fps}",
    )


@recipe(InterpolateRequest)
def interpolate(request: InterpolateRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.fps <= 0:
        raise PreconditionError("Frame rate must be greater than 0")
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"minterpolate=fps={request.fps}:mi_mode=mci:mc_mode=aobmc:vsbmc=1",
        ["-c:v", "libx264", "-preset", "veryfast", "-crf", "23", "-c:a", "copy"],
        f"interpolate to {request.fps} fps",
    )


def _concat_plan(
    ctx: RecipeContext, entries: list[Path], output: Path, description: str
) -> CompiledPlan:
    first = entries[0]
    listing = concat_list(entries, output)
    cmd = [
        ctx.flag,
        "-f",
        "concat",
        "-safe",
        "0",
        "-i",
        str(listing.path),
        *stream_codec_args(
            resolve_video_codec(first, output), resolve_audio_codec(first, output)
        ),
        str(output),
    ]
    return CompiledPlan.of(
        [ffmpeg(cmd, description)],
        [output],
        auxiliary=[listing],
        notes=[f"Concat list written to {listing.path}."],
    )


@recipe(LoopRequest)
def loop(request: LoopRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.times < 1:
        raise PreconditionError("Loop count must be at least 1")
    entries = [request.input] * request.times
    return _concat_plan(ctx, entries, request.output, f"loop {request.times} times")


@recipe(ConcatRequest)
def concat(request: ConcatRequest, ctx: RecipeContext) -> CompiledPlan:
    if len(request.inputs) < 2:
        raise PreconditionError("Concatenation requires at least 2 videos")
    return _concat_plan(
        ctx, list(request.inputs), request.output, f"concat {len(request.inputs)} videos"
    )


@recipe(AddAudioRequest)
def add_audio(request: AddAudioRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(request.video),
        "-i",
        str(request.audio),
        "-map",
        "0:v:0",
        "-map",
        "1:a:0",
        "-c:v",
        resolve_video_codec(request.video, request.output),
        "-c:a",
        "aac",
        "-shortest",
        str(request.output),
    ]
    return single(cmd, request.output, "add audio")


def _segment(
    ctx: RecipeContext, input_path: Path, start: float, length: float, output: Path
) -> Invocation:
    return ffmpeg(
        [
            ctx.flag,
            "-i",
            input_path,
            "-ss",
            f"{start:.3f}",
            "-t",
            f"{length:.3f}",
            *video_copy_args(resolve_video_codec(input_path, output)),
            output,
        ],
        f"segment {output.name}",
    )


@recipe(SplitRequest)
def split(request: SplitRequest, ctx: RecipeContext) -> CompiledPlan:
    """Cut the input into fixed-length segments or equal parts.

    The input duration is probed once to decide where the cuts fall.
    """
    duration = ctx.probe.duration_seconds(request.input)
    mode = request.mode
    invocations: list[Invocation] = []
    outputs: list[Path] = []

    if mode.every is not None:
        interval = mode.every.seconds
        if interval <= 0:
            raise PreconditionError("Split interval must be greater than 0")
        start = 0.0
        number = 1
        while start < duration:
            end = min(start + interval, duration)
            output = request.output_dir / _SPLIT_SEGMENT_NAME.format(number)
            invocations.append(_segment(ctx, request.input, start, end - start, output))
            outputs.append(output)
            start = end
            number += 1
    else:
        parts = mode.parts or 0
        if parts < 2:
            raise PreconditionError("Split must be into at least 2 parts")
        length = duration / parts
        for i in range(parts):
            start = i * length
            end = duration if i == parts - 1 else (i + 1) * length
            output = request.output_dir / _SPLIT_PART_NAME.format(i + 1, parts)
            invocations.append(_segment(ctx, request.input, start, end - start, output))
            outputs.append(output)

    return CompiledPlan.of(
        invocations,
        outputs,
        notes=[f"Input is {duration:.3f}s long; {len(invocations)} segment(s)."],
    )


@recipe(ExtractFramesRequest)
def extract_frames(request: ExtractFramesRequest, ctx: RecipeContext) -> CompiledPlan:
    interval = request.interval.seconds
    if interval <= 0:
        raise PreconditionError("Frame interval must be greater than 0")
    duration = ctx.probe.duration_seconds(request.input)

    invocations: list[Invocation] = []
    outputs: list[Path] = []
    time = 0.0
    number = 1
    while time < duration:
        output = request.output_dir / _FRAME_NAME.format(number)
        invocations.append(
            ffmpeg(
                [
                    ctx.flag,
                    "-ss",
                    f"{time:.3f}",
                    "-i",
                    request.input,
                    "-frames:v",
                    "1",
                    "-q:v",
                    "2",
                    output,
                ],
                f"frame {number}",
            )
        )
        outputs.append(output)
        time += interval
        number += 1
    return CompiledPlan.of(invocations, outputs)


@recipe(ThumbnailRequest)
def thumbnail(request: ThumbnailRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-ss",
        request.time.to_ffmpeg(),
        "-i",
        str(request.input),
        "-frames:v",
        "1",
        "-q:v",
        "2",
        str(request.output),
    ]
    return single(cmd, request.output, f"thumbnail at {request.time}")


@recipe(ThumbnailGridRequest)
def thumbnail_grid(request: ThumbnailGridRequest, ctx: RecipeContext) -> CompiledPlan:
    layout = request.layout
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-vf",
        f"select='not(mod(n\\,{layout.total_cells}))',scale=320:-1,tile={layout}",
        "-frames:v",
        "1",
        str(request.output),
    ]
    return single(cmd, request.output, f"thumbnail grid {layout}")


@recipe(PreviewRequest)
def preview(request: PreviewRequest, ctx: RecipeContext) -> CompiledPlan:
    # First 10 seconds at low quality
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-t",
        "10",
        "-vf",
        "scale=640:-2",
        "-c:v",
        "libx264",
        "-crf",
        "28",
        "-preset",
        "fast",
        "-c:a",
        "aac",
        "-b:a",
        "64k",
        str(request.output),
    ]
    return single(cmd, request.output, "preview")


@recipe(FixRotationRequest)
def fix_rotation(request: FixRotationRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        *video_copy_args(resolve_video_codec(request.input, request.output)),
        "-metadata:s:v:0",
        "rotate=0",
        str(request.output),
    ]
    return single(cmd, request.output, "clear rotation metadata")


@recipe(RepairRequest)
def repair(request: RepairRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-err_detect",
        "ignore_err",
        "-i",
        str(request.input),
        *video_copy_args(resolve_video_codec(request.input, request.output)),
        "-fflags",
        "+genpts",
        str(request.output),
    ]
    return single(cmd, request.output, "repair")


@recipe(SetMetadataRequest)
def set_metadata(request: SetMetadataRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-metadata",
        f"{request.key.ffmpeg_key}={request.value}",
        *video_copy_args(resolve_video_codec(request.input, request.output)),
        str(request.output),
    ]
    return single(cmd, request.output, f"set {request.key.value}")
