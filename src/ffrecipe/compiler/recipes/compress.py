"""Compression recipes: target size, target bitrate or quality preset.

Two-pass encodes emit an analysis pass that writes only encoder
statistics (to the platform null sink) followed by the real encode. The
analysis pass always overwrites since its output is discarded.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ffrecipe.compiler.bitrate import (
    QUALITY_TWO_PASS_BITRATES,
    BitrateAllocation,
    allocate_for_bitrate,
    allocate_for_size,
    null_sink,
)
from ffrecipe.compiler.codecs import resolve_audio_codec
from ffrecipe.compiler.invocation import CompiledPlan, Invocation, ffmpeg
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import CompressRequest
from ffrecipe.values import QualityPreset

logger = logging.getLogger(__name__)


def _analysis_pass(input_path: Path, video_bitrate: str) -> Invocation:
    return ffmpeg(
        [
            "-y",
            "-i",
            input_path,
            "-c:v",
            "libx264",
            "-b:v",
            video_bitrate,
            "-pass",
            "1",
            "-an",
            "-f",
            "mp4",
            null_sink(),
        ],
        "analysis pass",
    )


def _bitrate_plan(
    request: CompressRequest,
    ctx: RecipeContext,
    allocation: BitrateAllocation,
    notes: list[str],
) -> CompiledPlan:
    video_bitrate = f"{allocation.video_kbps}k"
    encode = [ctx.flag, "-i", str(request.input), "-c:v", "libx264", "-b:v", video_bitrate]
    if request.two_pass:
        encode += ["-pass", "2"]
    encode += [
        "-c:a",
        "aac",
        "-b:a",
        f"{allocation.audio_kbps}k",
        "-movflags",
        "+faststart",
        str(request.output),
    ]

    invocations = []
    if request.two_pass:
        invocations.append(_analysis_pass(request.input, video_bitrate))
    invocations.append(ffmpeg(encode, "encode pass" if request.two_pass else "encode"))
    notes.append(
        f"Video {allocation.video_kbps} kbps, audio {allocation.audio_kbps} kbps."
    )
    return CompiledPlan.of(invocations, [request.output], notes=notes)


def _quality_plan(
    request: CompressRequest, ctx: RecipeContext, quality: QualityPreset
) -> CompiledPlan:
    if not request.two_pass:
        cmd = [
            ctx.flag,
            "-i",
            str(request.input),
            "-c:v",
            "libx264",
            "-crf",
            str(quality.crf),
            "-preset",
            "medium",
            "-c:a",
            "aac",
            "-b:a",
            "192k",
            "-movflags",
            "+faststart",
            str(request.output),
        ]
        return CompiledPlan.of(
            [ffmpeg(cmd, "encode")],
            [request.output],
            notes=[f"Constant quality encode at CRF {quality.crf}."],
        )

    # Two-pass cannot use CRF; encode at an estimated bitrate instead
    estimated = QUALITY_TWO_PASS_BITRATES[quality.value]
    encode = [
        ctx.flag,
        "-i",
        str(request.input),
        "-c:v",
        "libx264",
        "-b:v",
        estimated,
        "-preset",
        "medium",
        "-pass",
        "2",
        "-c:a",
        resolve_audio_codec(request.input, request.output),
        "-b:a",
        "192k",
        "-movflags",
        "+faststart",
        str(request.output),
    ]
    return CompiledPlan.of(
        [_analysis_pass(request.input, estimated), ffmpeg(encode, "encode pass")],
        [request.output],
        notes=[f"Two-pass encode at an estimated {estimated} for {quality} quality."],
    )


@recipe(CompressRequest)
def compress(request: CompressRequest, ctx: RecipeContext) -> CompiledPlan:
    """Compile a compression request.

    Size targets probe the input duration to derive a bitrate; bitrate and
    quality targets need no probing.
    """
    target = request.target
    if target.quality is not None:
        return _quality_plan(request, ctx, target.quality)

    if target.size is not None:
        duration = ctx.probe.duration_seconds(request.input)
        allocation = allocate_for_size(target.size.bytes, duration)
        logger.debug(
            "Allocated %d kbps video / %d kbps audio for %s over %.2fs",
            allocation.video_kbps,
            allocation.audio_kbps,
            target.size,
            duration,
        )
        notes = [f"Target size {target.size} over {duration:.2f}s."]
    else:
        assert target.bitrate is not None
        allocation = allocate_for_bitrate(target.bitrate.bits_per_second)
        notes = [f"Target bitrate {target.bitrate}."]
    return _bitrate_plan(request, ctx, allocation, notes)
