"""Analysis recipes.

Detection recipes decode into the null muxer and report through the
filters' log lines; inspection recipes run the prober and report on its
standard output.
"""

from __future__ import annotations

from pathlib import Path

from ffrecipe.compiler.bitrate import null_sink
from ffrecipe.compiler.invocation import CompiledPlan, ffmpeg, ffprobe
from ffrecipe.compiler.recipes._common import single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    AnalyzeLoudnessRequest,
    DetectBlackRequest,
    DetectDuplicatesRequest,
    DetectScenesRequest,
    DetectSilenceRequest,
    ExportEdlRequest,
    ExtractKeyframesRequest,
    ExtractMetadataRequest,
    GenerateTestPatternRequest,
    StatsRequest,
    ValidateRequest,
)
from ffrecipe.values._common import format_number

SCENE_THRESHOLD = "0.3"
KEYFRAME_PATTERN = "keyframe_%05d.jpg"


def _null_pass(
    flag: str,
    input_path: Path,
    option: str,
    chain: str,
    description: str,
    sink: str = "-",
) -> CompiledPlan:
    cmd = [flag, "-i", str(input_path), option, chain, "-f", "null", sink]
    return CompiledPlan.of(
        [ffmpeg(cmd, description)],
        notes=["Results are reported in the encoder log."],
    )


def _probe_plan(args: list[str], description: str) -> CompiledPlan:
    return CompiledPlan.of([ffprobe(args, description)])


@recipe(DetectScenesRequest)
def detect_scenes(request: DetectScenesRequest, ctx: RecipeContext) -> CompiledPlan:
    return _null_pass(
        ctx.flag,
        request.input,
        "-vf",
        f"select='gt(scene,{SCENE_THRESHOLD})',showinfo",
        "detect scenes",
    )


@recipe(DetectBlackRequest)
def detect_black(request: DetectBlackRequest, ctx: RecipeContext) -> CompiledPlan:
    return _null_pass(
        ctx.flag, request.input, "-vf", "blackdetect=d=0.1:pix_th=0.1", "detect black frames"
    )


@recipe(DetectSilenceRequest)
def detect_silence(request: DetectSilenceRequest, ctx: RecipeContext) -> CompiledPlan:
    return _null_pass(
        ctx.flag,
        request.input,
        "-af",
        "silencedetect=noise=-30dB:duration=0.5",
        "detect silence",
    )


@recipe(AnalyzeLoudnessRequest)
def analyze_loudness(request: AnalyzeLoudnessRequest, ctx: RecipeContext) -> CompiledPlan:
    return _null_pass(
        ctx.flag,
        request.input,
        "-af",
        "loudnorm=I=-16:TP=-1.5:LRA=11:print_format=json",
        "analyze loudness",
    )


@recipe(DetectDuplicatesRequest)
def detect_duplicates(request: DetectDuplicatesRequest, ctx: RecipeContext) -> CompiledPlan:
    return _null_pass(
        ctx.flag,
        request.input,
        "-vf",
        "select='not(gt(scene\\,0.0001))',showinfo",
        "detect duplicate frames",
        sink=null_sink(),
    )


@recipe(ExtractKeyframesRequest)
def extract_keyframes(request: ExtractKeyframesRequest, ctx: RecipeContext) -> CompiledPlan:
    """Write every I-frame as a numbered JPEG in ``output_dir``."""
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-vf",
        "select='eq(pict_type,I)'",
        "-vsync",
        "vfr",
        "-f",
        "image2",
        str(request.output_dir / KEYFRAME_PATTERN),
    ]
    return single(cmd, request.output_dir, "extract keyframes")


@recipe(StatsRequest)
def stats(request: StatsRequest, ctx: RecipeContext) -> CompiledPlan:
    return _probe_plan(
        [
            "-v",
            "error",
            "-show_entries",
            "stream=codec_name,codec_type,width,height,bit_rate,r_frame_rate,duration,nb_frames",
            "-show_entries",
            "format=size,duration,bit_rate",
            "-of",
            "json",
            str(request.input),
        ],
        "stream statistics",
    )


@recipe(ValidateRequest)
def validate(request: ValidateRequest, ctx: RecipeContext) -> CompiledPlan:
    """A file is valid when the prober can read its duration and size."""
    return _probe_plan(
        [
            "-v",
            "error",
            "-show_entries",
            "format=duration,size",
            "-of",
            "default=noprint_wrappers=1",
            str(request.input),
        ],
        "validate",
    )


@recipe(ExtractMetadataRequest)
def extract_metadata(request: ExtractMetadataRequest, ctx: RecipeContext) -> CompiledPlan:
    return _probe_plan(
        [
            "-v",
            "error",
            "-show_format",
            "-show_streams",
            "-of",
            request.format.value,
            str(request.input),
        ],
        f"metadata as {request.format.value}",
    )


@recipe(ExportEdlRequest)
def export_edl(request: ExportEdlRequest, ctx: RecipeContext) -> CompiledPlan:
    """List video frame timestamps, one per line, as edit points."""
    return _probe_plan(
        [
            "-v",
            "error",
            "-show_frames",
            "-select_streams",
            "v:0",
            "-show_entries",
            "frame=pts_time",
            "-of",
            "csv=p=0",
            str(request.input),
        ],
        "frame timestamps",
    )


@recipe(GenerateTestPatternRequest)
def generate_test_pattern(
    request: GenerateTestPatternRequest, ctx: RecipeContext
) -> CompiledPlan:
    seconds = format_number(request.duration.seconds)
    size = f"{request.resolution.width}x{request.resolution.height}"
    cmd = [
        ctx.flag,
        "-f",
        "lavfi",
        "-i",
        f"testsrc=duration={seconds}:size={size}:rate=30",
        "-t",
        seconds,
        "-c:v",
        "libx264",
        "-pix_fmt",
        "yuv420p",
        str(request.output),
    ]
    return single(cmd, request.output, f"test pattern {request.resolution}")
