"""Video commands: format conversion, compression and basic transforms."""

from __future__ import annotations

from pathlib import Path

import click

from ffrecipe.cli.params import ValueType
from ffrecipe.cli.runner import execute, get_state
from ffrecipe.compiler.requests import (
    AnimatedGifRequest,
    ChangeSpeedRequest,
    CompressRequest,
    ConvertRequest,
    ResizeRequest,
    RotateRequest,
    TrimRequest,
)
from ffrecipe.values import (
    CompressTarget,
    ConvertFormat,
    QualityPreset,
    ResizeTarget,
    RotateDegrees,
    SpeedFactor,
    Time,
    VideoCodec,
)

INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)

# Default output suffix per convert target; streaming targets write a directory
_CONVERT_SUFFIXES = {
    ConvertFormat.GIF: "gif",
    ConvertFormat.MP4: "convert",
    ConvertFormat.WEBM: "convert",
    ConvertFormat.MP3: "audio",
    ConvertFormat.WAV: "audio",
    ConvertFormat.IPHONE: "iphone",
    ConvertFormat.ANDROID: "android",
    ConvertFormat.HLS: "hls",
    ConvertFormat.DASH: "dash",
    ConvertFormat.VIDEO_360: "360",
}


@click.command("convert")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("target", type=ValueType(ConvertFormat.parse, "format"))
@click.option(
    "--quality",
    type=ValueType(QualityPreset.parse, "quality"),
    default=None,
    help="Quality preset: low, medium, high or ultra.",
)
@click.option(
    "--codec",
    type=ValueType(VideoCodec.parse, "codec"),
    default=None,
    help="Video codec: h264, h265, vp9 or copy.",
)
@click.pass_context
def convert_command(
    ctx: click.Context,
    input_path: Path,
    target: ConvertFormat,
    quality: QualityPreset | None,
    codec: VideoCodec | None,
) -> None:
    """Convert INPUT to another format.

    TARGET is one of gif, mp4, webm, mp3, wav, iphone, android, hls, dash
    or 360. HLS and DASH write a directory of segments.
    """
    state = get_state(ctx)
    suffix = _CONVERT_SUFFIXES[target]
    if target in (ConvertFormat.HLS, ConvertFormat.DASH):
        output = state.output_dir(input_path, suffix)
    else:
        output = state.output_path(input_path, suffix, target.extension)
    execute(
        state,
        ConvertRequest(
            input=input_path, output=output, format=target, quality=quality, codec=codec
        ),
    )


@click.command("gif")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.option("--loop/--no-loop", default=True, help="Loop forever (default: on).")
@click.option("--optimize", is_flag=True, default=False, help="Favour a smaller file.")
@click.pass_context
def gif_command(ctx: click.Context, input_path: Path, loop: bool, optimize: bool) -> None:
    """Make an animated GIF from INPUT."""
    state = get_state(ctx)
    output = state.output_path(input_path, "animated", "gif")
    execute(
        state,
        AnimatedGifRequest(input=input_path, output=output, loop=loop, optimize=optimize),
    )


@click.command("compress")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("target", type=ValueType(CompressTarget.parse, "target"))
@click.option(
    "--two-pass",
    is_flag=True,
    default=False,
    help="Use two-pass encoding for more accurate size targeting.",
)
@click.pass_context
def compress_command(
    ctx: click.Context, input_path: Path, target: CompressTarget, two_pass: bool
) -> None:
    """Compress INPUT to a size, bitrate or quality TARGET.

    Examples: 10mb, 800kbps, high-quality.
    """
    state = get_state(ctx)
    output = state.output_path(input_path, "compressed", "mp4")
    execute(
        state,
        CompressRequest(input=input_path, output=output, target=target, two_pass=two_pass),
    )


@click.command("trim")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("start", type=ValueType(Time.parse, "time"))
@click.argument("end", type=ValueType(Time.parse, "time"))
@click.pass_context
def trim_command(ctx: click.Context, input_path: Path, start: Time, end: Time) -> None:
    """Keep INPUT between START and END (SS, M:SS or H:MM:SS)."""
    state = get_state(ctx)
    output = state.output_path(input_path, "trim", "mp4")
    execute(state, TrimRequest(input=input_path, output=output, start=start, end=end))


@click.command("resize")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("target", type=ValueType(ResizeTarget.parse, "size"))
@click.pass_context
def resize_command(ctx: click.Context, input_path: Path, target: ResizeTarget) -> None:
    """Resize INPUT to WxH or a preset such as 720p, 1080p or 4k."""
    state = get_state(ctx)
    output = state.output_path(input_path, "resized", "mp4")
    execute(state, ResizeRequest(input=input_path, output=output, target=target))


@click.command("speed")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("factor", type=ValueType(SpeedFactor.parse, "factor"))
@click.option(
    "--slow-down",
    is_flag=True,
    default=False,
    help="Divide the playback speed by FACTOR instead of multiplying it.",
)
@click.pass_context
def speed_command(
    ctx: click.Context, input_path: Path, factor: SpeedFactor, slow_down: bool
) -> None:
    """Change the playback speed of INPUT by FACTOR (e.g. 2x, 1.5x)."""
    state = get_state(ctx)
    output = state.output_path(input_path, "speed", "mp4")
    execute(
        state,
        ChangeSpeedRequest(input=input_path, output=output, factor=factor, slow_down=slow_down),
    )


@click.command("timelapse")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("factor", type=ValueType(SpeedFactor.parse, "factor"))
@click.pass_context
def timelapse_command(ctx: click.Context, input_path: Path, factor: SpeedFactor) -> None:
    """Speed INPUT up by a large FACTOR (e.g. 10x) into a time-lapse."""
    state = get_state(ctx)
    output = state.output_path(input_path, "timelapse", "mp4")
    execute(state, ChangeSpeedRequest(input=input_path, output=output, factor=factor))


@click.command("rotate")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("degrees", type=ValueType(RotateDegrees.parse, "degrees"))
@click.pass_context
def rotate_command(ctx: click.Context, input_path: Path, degrees: RotateDegrees) -> None:
    """Rotate INPUT by DEGREES (90, 180 or 270)."""
    state = get_state(ctx)
    output = state.output_path(input_path, "rotated", "mp4")
    execute(state, RotateRequest(input=input_path, output=output, degrees=degrees))
