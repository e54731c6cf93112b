"""Format conversion recipes."""

from __future__ import annotations

from pathlib import Path

from ffrecipe.compiler.codecs import resolve_audio_codec
from ffrecipe.compiler.graph import simple_chain
from ffrecipe.compiler.invocation import CompiledPlan, ffmpeg
from ffrecipe.compiler.recipes._common import filter_encode, palette_path, single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    AnimatedGifRequest,
    ConvertColorspaceRequest,
    ConvertRequest,
    FixFramerateRequest,
    HdrToSdrRequest,
    ProxyRequest,
    SocialConvertRequest,
    SocialCropRequest,
    StoryFormatRequest,
    VerticalConvertRequest,
)
from ffrecipe.values import AudioFormat, ConvertFormat, QualityPreset, SocialCropShape, VideoCodec

GIF_FPS = 15
GIF_WIDTH = 480

# Quality preset -> (fps, width) for GIF output
GIF_QUALITY = {
    QualityPreset.LOW: (10, 320),
    QualityPreset.MEDIUM: (GIF_FPS, GIF_WIDTH),
    QualityPreset.HIGH: (20, 640),
    QualityPreset.ULTRA: (30, 800),
}

DEFAULT_CRF = 23
STREAM_SEGMENT_SECONDS = "10"


def _gif_scale(fps: int, width: int) -> str:
    return f"fps={fps},scale={width}:-1:flags=lanczos"


def _palette_steps(
    input_path: Path,
    output: Path,
    scale: str,
    palettegen: str,
    paletteuse: str,
    extra: list[str],
) -> CompiledPlan:
    # The palette is an intermediate file: both steps always overwrite
    palette = palette_path(output)
    generate = ffmpeg(
        ["-y", "-i", input_path, "-vf", f"{scale},{palettegen}", palette],
        "generate palette",
    )
    apply = ffmpeg(
        [
            "-y",
            "-i",
            input_path,
            "-i",
            palette,
            "-lavfi",
            f"{scale}[x];[x][1:v]{paletteuse}",
            *extra,
            output,
        ],
        "encode gif",
    )
    return CompiledPlan.of(
        [generate, apply],
        [output],
        notes=["GIF uses palettegen + paletteuse for quality and smaller size."],
    )


def _gif(request: ConvertRequest) -> CompiledPlan:
    fps, width = GIF_QUALITY.get(request.quality, (GIF_FPS, GIF_WIDTH))
    return _palette_steps(
        request.input,
        request.output,
        _gif_scale(fps, width),
        "palettegen",
        "paletteuse=dither=bayer",
        [],
    )


def _generic(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    codec = request.codec
    if request.format is ConvertFormat.WEBM and codec is None:
        codec = VideoCodec.VP9
    quality = request.quality

    cmd = [ctx.flag, "-i", str(request.input)]
    if codec is not None:
        cmd += ["-c:v", codec.ffmpeg_name]
        if quality is not None:
            if codec in (VideoCodec.H264, VideoCodec.H265):
                cmd += ["-crf", str(quality.crf), "-preset", "medium"]
            elif codec is VideoCodec.VP9:
                cmd += ["-crf", str(quality.vp9_crf)]
    elif quality is not None:
        cmd += ["-c:v", "libx264", "-crf", str(quality.crf), "-preset", "medium"]

    cmd += ["-c:a", resolve_audio_codec(request.input, request.output)]
    cmd.append(str(request.output))
    return single(cmd, request.output, f"convert to {request.format.value}")


def _audio_only(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    audio_format = AudioFormat(request.format.extension)
    output = request.output.with_suffix(f".{audio_format.value}")
    cmd = [ctx.flag, "-i", str(request.input), "-vn", *audio_format.codec_args(), str(output)]
    return single(cmd, output, "extract audio")


def _device(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    crf = request.quality.crf if request.quality else DEFAULT_CRF
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-vf",
        "scale='min(1920,iw)':'min(1080,ih)':force_original_aspect_ratio=decrease",
        "-c:v",
        "libx264",
        "-crf",
        str(crf),
        "-preset",
        "medium",
    ]
    if request.format is ConvertFormat.IPHONE:
        cmd += ["-profile:v", "high", "-level", "4.0", "-pix_fmt", "yuv420p"]
        cmd += ["-movflags", "+faststart"]
    else:
        cmd += ["-profile:v", "baseline", "-level", "3.0", "-pix_fmt", "yuv420p"]
    cmd += ["-c:a", "aac", "-b:a", "128k", str(request.output)]
    return single(cmd, request.output, f"convert for {request.format.value}")


def _hls(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    crf = request.quality.crf if request.quality else DEFAULT_CRF
    out_dir = request.output
    playlist = out_dir / "playlist.m3u8"
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-c:v",
        "libx264",
        "-crf",
        str(crf),
        "-preset",
        "medium",
        "-c:a",
        "aac",
        "-b:a",
        "128k",
        "-f",
        "hls",
        "-hls_time",
        STREAM_SEGMENT_SECONDS,
        # Keep all segments in the playlist
        "-hls_list_size",
        "0",
        "-hls_segment_filename",
        str(out_dir / "segment_%03d.ts"),
        str(playlist),
    ]
    return single(cmd, playlist, "package hls")


def _dash(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    crf = request.quality.crf if request.quality else DEFAULT_CRF
    manifest = request.output / "manifest.mpd"
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-c:v",
        "libx264",
        "-crf",
        str(crf),
        "-preset",
        "medium",
        "-c:a",
        resolve_audio_codec(request.input, manifest),
        "-b:a",
        "128k",
        "-f",
        "dash",
        "-seg_duration",
        STREAM_SEGMENT_SECONDS,
        "-use_timeline",
        "1",
        "-use_template",
        "1",
        "-init_seg_name",
        "init_$RepresentationID$.m4s",
        # Segment names are relative to the manifest
        "-media_seg_name",
        "segment_%03d.m4s",
        str(manifest),
    ]
    return single(cmd, manifest, "package dash")


def _video_360(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-c:v",
        "libx264",
        "-c:a",
        "copy",
        "-metadata:s:v:0",
        "spherical-video=1",
        "-metadata:s:v:0",
        "stereo-mode=mono",
        "-vf",
        "v360=input=equirect:output=equirect",
        str(request.output),
    ]
    return single(cmd, request.output, "tag 360 video")


@recipe(ConvertRequest)
def convert(request: ConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    fmt = request.format
    if fmt is ConvertFormat.GIF:
        return _gif(request)
    if fmt in (ConvertFormat.MP3, ConvertFormat.WAV):
        return _audio_only(request, ctx)
    if fmt in (ConvertFormat.IPHONE, ConvertFormat.ANDROID):
        return _device(request, ctx)
    if fmt is ConvertFormat.HLS:
        return _hls(request, ctx)
    if fmt is ConvertFormat.DASH:
        return _dash(request, ctx)
    if fmt is ConvertFormat.VIDEO_360:
        return _video_360(request, ctx)
    return _generic(request, ctx)


@recipe(AnimatedGifRequest)
def animated_gif(request: AnimatedGifRequest, ctx: RecipeContext) -> CompiledPlan:
    palettegen = "palettegen=stats_mode=diff" if request.optimize else "palettegen"
    paletteuse = "paletteuse=dither=bayer:bayer_scale=5" if request.optimize else "paletteuse"
    extra = ["-loop", "0"] if request.loop else []
    plan = _palette_steps(
        request.input,
        request.output,
        _gif_scale(GIF_FPS, GIF_WIDTH),
        palettegen,
        paletteuse,
        extra,
    )
    notes = list(plan.notes)
    if request.loop:
        notes.append("GIF will loop infinitely.")
    if request.optimize:
        notes.append("GIF will be optimized for smaller file size.")
    return CompiledPlan.of(plan.invocations, plan.outputs, notes=notes)


@recipe(ConvertColorspaceRequest)
def convert_colorspace(request: ConvertColorspaceRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"colorspace=all={request.target.to_ffmpeg()}:iall=bt709",
        ["-c:v", "libx264", "-c:a", resolve_audio_codec(request.input, request.output)],
        "convert colorspace",
    )


@recipe(HdrToSdrRequest)
def hdr_to_sdr(request: HdrToSdrRequest, ctx: RecipeContext) -> CompiledPlan:
    tonemap = simple_chain(
        "colorspace=bt709:iall=bt709:fast=1",
        "zscale=t=linear:npl=100",
        "format=gbrpf32le",
        "zscale=p=bt709",
        "tonemap=hable:desat=0",
        "zscale=t=bt709:m=bt709:r=tv",
        "format=yuv420p",
    )
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        tonemap,
        [
            "-c:v",
            "libx264",
            "-crf",
            "23",
            "-preset",
            "medium",
            "-c:a",
            resolve_audio_codec(request.input, request.output),
        ],
        "tone map hdr to sdr",
    )


@recipe(FixFramerateRequest)
def fix_framerate(request: FixFramerateRequest, ctx: RecipeContext) -> CompiledPlan:
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-vsync",
        "cfr",
        "-r",
        "30",
        "-c:v",
        "libx264",
        "-crf",
        "23",
        "-preset",
        "medium",
        "-c:a",
        "copy",
        str(request.output),
    ]
    return single(cmd, request.output, "fix frame rate")


@recipe(ProxyRequest)
def proxy(request: ProxyRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "scale=1280:720",
        ["-c:v", "libx264", "-preset", "ultrafast", "-crf", "28"]
        + ["-c:a", "aac", "-b:a", "128k"],
        "create proxy",
    )


@recipe(SocialConvertRequest)
def social_convert(request: SocialConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    platform = request.platform
    w, h = platform.width, platform.height
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"scale={w}:{h}:force_original_aspect_ratio=decrease,pad={w}:{h}:(ow-iw)/2:(oh-ih)/2",
        [
            "-c:v",
            "libx264",
            "-b:v",
            f"{platform.bitrate_kbps}k",
            "-r",
            "30",
            "-c:a",
            "aac",
            "-b:a",
            "128k",
            "-movflags",
            "+faststart",
        ],
        f"convert for {platform}",
    )


_SQUARE_CROP = "crop='min(iw,ih)':'min(iw,ih)':(iw-ow)/2:(ih-oh)/2"
_INSIDE_CIRCLE = "lt(sqrt(pow(X-W/2,2)+pow(Y-H/2,2)),W/2)"
_CIRCLE_MASK = (
    f"geq=lum='if({_INSIDE_CIRCLE},lum(X,Y),0)'"
    f":cb='if({_INSIDE_CIRCLE},cb(X,Y),128)'"
    f":cr='if({_INSIDE_CIRCLE},cr(X,Y),128)'"
)


@recipe(SocialCropRequest)
def social_crop(request: SocialCropRequest, ctx: RecipeContext) -> CompiledPlan:
    filters = [_SQUARE_CROP]
    if request.shape is SocialCropShape.CIRCLE:
        filters.append(_CIRCLE_MASK)
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        simple_chain(*filters),
        ["-c:v", "libx264", "-c:a", "copy"],
        f"crop {request.shape.value}",
    )


_VERTICAL_FIT = (
    "scale=1080:1920:force_original_aspect_ratio=decrease,"
    "pad=1080:1920:(ow-iw)/2:(oh-ih)/2:black"
)


@recipe(VerticalConvertRequest)
def vertical_convert(request: VerticalConvertRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        _VERTICAL_FIT,
        ["-c:v", "libx264", "-c:a", "copy"],
        "convert to vertical",
    )


@recipe(StoryFormatRequest)
def story_format(request: StoryFormatRequest, ctx: RecipeContext) -> CompiledPlan:
    # Stories are capped at 15 seconds
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-t",
        "15",
        "-vf",
        _VERTICAL_FIT,
        "-c:v",
        "libx264",
        "-preset",
        "fast",
        "-crf",
        "23",
        "-c:a",
        "aac",
        "-b:a",
        "128k",
        "-movflags",
        "+faststart",
        str(request.output),
    ]
    return single(cmd, request.output, "convert to story")
