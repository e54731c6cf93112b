"""Visual effect recipes."""

from __future__ import annotations

from ffrecipe.compiler.graph import FilterGraph, simple_chain
from ffrecipe.compiler.invocation import CompiledPlan
from ffrecipe.compiler.recipes._common import filter_encode, single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    BlurRequest,
    BurnSubtitleRequest,
    ColorGradeRequest,
    DenoiseRequest,
    FilterRequest,
    GlitchRequest,
    GrayscaleRequest,
    LensCorrectRequest,
    MotionBlurRequest,
    StabilizeRequest,
    VignetteRequest,
    VintageFilmRequest,
)
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import ColorGradePreset, VintageEra
from ffrecipe.values._common import format_number

# Re-encode video, keep audio untouched
_X264_COPY_AUDIO = ["-c:v", "libx264", "-c:a", "copy"]
_X264_AAC = ["-c:v", "libx264", "-c:a", "aac"]

GLITCH_MAX_SHIFT = 15
GLITCH_MAX_NOISE = 100

# Distance from the centre to a corner in normalised frame coordinates
VIGNETTE_MAX_DISTANCE = 0.707

_COLOR_GRADES = {
    ColorGradePreset.CINEMATIC: "curves=preset=lighter,eq=contrast=1.2:saturation=1.1",
    ColorGradePreset.WARM: "colorbalance=rs=0.15:gs=-0.05:bs=-0.15,eq=saturation=1.1",
    ColorGradePreset.COOL: "colorbalance=rs=-0.1:gs=0.05:bs=0.15,eq=saturation=1.1",
    ColorGradePreset.DRAMATIC: "curves=preset=strong_contrast,eq=contrast=1.3:saturation=1.2",
}

_VINTAGE_LOOKS = {
    VintageEra.SEVENTIES: (
        "noise=alls=15:allf=t+u",
        "curves=vintage",
        "eq=brightness=0.1:contrast=1.05:saturation=0.7",
        "colorbalance=rs=0.15:gs=-0.05:bs=-0.1",
    ),
    VintageEra.EIGHTIES: (
        "noise=alls=12:allf=t+u",
        "curves=vintage",
        "eq=brightness=-0.05:contrast=1.2:saturation=1.1",
        "colorbalance=rs=-0.1:gs=0.05:bs=0.15",
    ),
    VintageEra.NINETIES: (
        "noise=alls=8:allf=t+u",
        "curves=vintage",
        "eq=brightness=0.02:contrast=1.1:saturation=0.9",
        "colorbalance=rs=0.05:gs=0:bs=-0.05",
    ),
    VintageEra.CLASSIC: (
        "noise=alls=10:allf=t+u",
        "curves=vintage",
        "eq=brightness=0.05:contrast=1.1:saturation=0.8",
    ),
}


@recipe(GrayscaleRequest)
def grayscale(request: GrayscaleRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag, request.input, request.output, "format=gray", _X264_AAC, "grayscale"
    )


@recipe(FilterRequest)
def color_filter(request: FilterRequest, ctx: RecipeContext) -> CompiledPlan:
    """Apply a colour preset, or brightness/contrast/saturation through eq.

    A preset takes precedence over individual adjustments.
    """
    if request.preset is not None:
        filters = request.preset.filters()
    else:
        eq = request.adjustments.to_eq()
        filters = [eq] if eq else []
    if not filters:
        raise PreconditionError("No filter parameters provided")
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        simple_chain(*filters),
        _X264_AAC,
        "color filter",
    )


@recipe(BlurRequest)
def blur(request: BlurRequest, ctx: RecipeContext) -> CompiledPlan:
    """Blur a rectangular region, or the whole frame when no region is set.

    A region is blurred by blurring a copy of the frame, cropping the
    region out of it and overlaying it back at the same position.
    """
    strength = request.blur.strength
    box = f"boxblur={strength}:{strength}"
    region = request.blur.region
    if region is None:
        return filter_encode(
            ctx.flag, request.input, request.output, box, _X264_COPY_AUDIO, "blur frame"
        )

    graph = FilterGraph()
    graph.chain(box, inputs=["0:v"], outputs=["blurred"])
    graph.chain(
        f"crop={region.width}:{region.height}:{region.x}:{region.y}",
        inputs=["blurred"],
        outputs=["blurred_crop"],
    )
    graph.chain(
        f"overlay={region.x}:{region.y}", inputs=["0:v", "blurred_crop"], outputs=["v"]
    )
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-filter_complex",
        graph.render(mapped=["v"]),
        "-map",
        "[v]",
        "-map",
        "0:a?",
        *_X264_COPY_AUDIO,
        str(request.output),
    ]
    return single(cmd, request.output, f"blur region {region}")


@recipe(StabilizeRequest)
def stabilize(request: StabilizeRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "deshake",
        ["-c:v", "libx264", "-preset", "veryfast", "-crf", "23", "-c:a", "copy"],
        "stabilize",
    )


@recipe(DenoiseRequest)
def denoise(request: DenoiseRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "hqdn3d=4:3:6:4.5",
        ["-c:v", "libx264", "-preset", "medium", "-crf", "23", "-c:a", "copy"],
        "denoise",
    )


@recipe(MotionBlurRequest)
def motion_blur(request: MotionBlurRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.frames < 1:
        raise PreconditionError("Motion blur needs at least 1 frame")
    weights = " ".join("1" for _ in range(request.frames))
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"tmix=frames={request.frames}:weights={weights}",
        _X264_COPY_AUDIO,
        "motion blur",
    )


def _clamp_unit(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _num(value: float) -> str:
    return format_number(round(value, 6))


@recipe(VignetteRequest)
def vignette(request: VignetteRequest, ctx: RecipeContext) -> CompiledPlan:
    """Darken towards the corners with a radial luma falloff."""
    intensity = _clamp_unit(request.intensity)
    size = _clamp_unit(request.size)
    falloff = 1.0 - size
    if falloff <= 0:
        raise PreconditionError("Vignette size must be less than 1.0")
    distance = f"sqrt(pow(X/W-0.5,2)+pow(Y/H-0.5,2))/{VIGNETTE_MAX_DISTANCE}"
    lum = (
        f"p(X,Y)*max({_num(1.0 - intensity)},"
        f"1-max(0,({distance}-{_num(size)})/{_num(falloff)})*{_num(intensity)})"
    )
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        f"geq=lum='{lum}':cb='p(X,Y)':cr='p(X,Y)'",
        _X264_COPY_AUDIO,
        "vignette",
    )


@recipe(LensCorrectRequest)
def lens_correct(request: LensCorrectRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        "lenscorrection=k1=-0.1:k2=-0.05",
        _X264_COPY_AUDIO,
        "correct lens distortion",
    )


@recipe(GlitchRequest)
def glitch(request: GlitchRequest, ctx: RecipeContext) -> CompiledPlan:
    shift = min(request.shift, GLITCH_MAX_SHIFT)
    noise = min(request.noise, GLITCH_MAX_NOISE)
    vf = simple_chain(
        "format=rgb24",
        f"geq=r='r(X+{shift},Y)':g='g(X,Y)':b='b(X-{shift},Y)'",
        f"noise=alls={noise}:allf=t+u",
        "format=yuv420p",
    )
    return filter_encode(ctx.flag, request.input, request.output, vf, _X264_COPY_AUDIO, "glitch")


@recipe(VintageFilmRequest)
def vintage_film(request: VintageFilmRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        simple_chain(*_VINTAGE_LOOKS[request.era]),
        _X264_COPY_AUDIO,
        f"vintage {request.era.value}",
    )


@recipe(ColorGradeRequest)
def color_grade(request: ColorGradeRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        _COLOR_GRADES[request.preset],
        _X264_COPY_AUDIO,
        f"grade {request.preset.value}",
    )


@recipe(BurnSubtitleRequest)
def burn_subtitle(request: BurnSubtitleRequest, ctx: RecipeContext) -> CompiledPlan:
    path = str(request.subtitle)
    name = "ass" if request.subtitle.suffix.lower() == ".ass" else "subtitles"
    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-vf",
        f"{name}={path}",
        "-c:a",
        "copy",
        "-c:v",
        "libx264",
        str(request.output),
    ]
    return single(cmd, request.output, "burn subtitles")
