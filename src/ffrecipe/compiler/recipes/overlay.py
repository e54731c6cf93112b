"""Overlay recipes: watermarks, text, picture-in-picture and keying.

Two-input recipes take the base video as input 0 and the overlay as input
1, and keep the base video's audio when it has any.
"""

from __future__ import annotations

from pathlib import Path

from ffrecipe.compiler.graph import FilterGraph
from ffrecipe.compiler.invocation import AuxiliaryFile, CompiledPlan, ffmpeg
from ffrecipe.compiler.recipes._common import filter_encode, quote_path, single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    AddTextRequest,
    AnimatedTextRequest,
    OverlayRequest,
    PipRequest,
    RemoveBackgroundRequest,
    TimecodeRequest,
    WatermarkRequest,
)
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import Anchor, Opacity, TextAnimation, TextPosition, TextStyle
from ffrecipe.values._common import format_number

TYPEWRITER_SCRIPT_NAME = "typewriter.ass"
TYPEWRITER_CHARS_PER_SECOND = 5.0
# End time of the last typewriter event, long enough for any clip
TYPEWRITER_HOLD_SECONDS = 999.0

PIP_SCALE = "scale=iw*0.3:-1"

TIMECODE_DRAWTEXT = (
    "drawtext=text='%{pts\\:hms}':fontsize=24:fontcolor=white"
    ":x=10:y=10:box=1:boxcolor=black@0.5"
)

CHROMAKEY_SIMILARITY = "0.3"
CHROMAKEY_BLEND = "0.1"

# Local timestamp rendered by drawtext instead of static text
LOCALTIME_TEXT = "%{pts\\:localtime\\:%Y-%m-%d %H\\:%M\\:%S}"

_DRAWTEXT_ESCAPES = (("\\", "\\\\"), (":", "\\:"), ("[", "\\["), ("]", "\\]"), ("'", "\\'"))


def escape_drawtext(text: str) -> str:
    """Escape text for a single-quoted drawtext ``text`` option."""
    for char, escaped in _DRAWTEXT_ESCAPES:
        text = text.replace(char, escaped)
    return text


def _two_input_overlay(
    flag: str, base: Path, overlay: Path, graph: FilterGraph, output: Path, description: str
) -> CompiledPlan:
    cmd = [
        flag,
        "-i",
        str(base),
        "-i",
        str(overlay),
        "-filter_complex",
        graph.render(mapped=["v"]),
        "-map",
        "[v]",
        "-map",
        "0:a?",
        "-c:v",
        "libx264",
        "-c:a",
        "aac",
        str(output),
    ]
    return single(cmd, output, description)


def _alpha_filters(opacity: Opacity) -> list[str]:
    filters = ["format=rgba"]
    if not opacity.is_opaque:
        filters.append(f"colorchannelmixer=aa={format_number(opacity.value)}")
    return filters


@recipe(WatermarkRequest)
def watermark(request: WatermarkRequest, ctx: RecipeContext) -> CompiledPlan:
    """Overlay a logo image, optionally scaled and semi-transparent.

    A fractional size scales the logo against the main video's width with
    ``scale2ref``; a pixel size scales the logo on its own.
    """
    position = request.position.to_overlay()
    size = request.size
    graph = FilterGraph()

    if size is not None and size.is_fraction:
        graph.chain(
            f"scale2ref=w=iw*{format_number(size.fraction)}:h=ow/mdar",
            inputs=["1:v", "0:v"],
            outputs=["logo_scaled", "ref"],
        )
        graph.chain(_alpha_filters(request.opacity), inputs=["logo_scaled"], outputs=["logo"])
        graph.chain(f"overlay={position}", inputs=["ref", "logo"], outputs=["v"])
    else:
        filters = _alpha_filters(request.opacity)
        if size is not None:
            height = size.height if size.height is not None else -1
            filters.insert(0, f"scale={size.width}:{height}")
        graph.chain(filters, inputs=["1:v"], outputs=["logo"])
        graph.chain(f"overlay={position}", inputs=["0:v", "logo"], outputs=["v"])

    return _two_input_overlay(
        ctx.flag, request.input, request.logo, graph, request.output, "watermark"
    )


def _drawtext(text: str, style: TextStyle, x: str, y: str, extra: str = "") -> str:
    parts = [
        f"drawtext=text='{text}'",
        f"fontsize={style.effective_font_size}",
        f"fontcolor={style.color.to_ffmpeg()}",
        f"x={x}",
        f"y={y}",
    ]
    if extra:
        parts.append(extra)
    if style.font_file:
        parts.append(f"fontfile='{quote_path(Path(style.font_file))}'")
    return ":".join(parts)


@recipe(AddTextRequest)
def add_text(request: AddTextRequest, ctx: RecipeContext) -> CompiledPlan:
    if request.timestamp:
        text = LOCALTIME_TEXT
    elif request.text:
        text = escape_drawtext(request.text)
    else:
        raise PreconditionError("Text is required unless a timestamp is requested")
    x, y = request.position.to_drawtext()
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        _drawtext(text, request.style, x, y),
        ["-c:v", "libx264", "-c:a", "aac"],
        "add text",
    )


# drawtext uses text_w/text_h inside animated expressions
def _animated_xy(position: TextPosition) -> tuple[str, str]:
    if position.anchor is None:
        raise PreconditionError("Custom position not supported for animated text")
    x, y = position.to_drawtext()
    return (
        x.replace("W", "w").replace("tw", "text_w"),
        y.replace("H", "h").replace("th", "text_h"),
    )


# ASS numpad alignment for each anchor
_ASS_ALIGNMENT = {
    Anchor.BOTTOM_LEFT: 1,
    Anchor.BOTTOM_CENTER: 2,
    Anchor.BOTTOM_RIGHT: 3,
    Anchor.CENTER: 5,
    Anchor.TOP_LEFT: 7,
    Anchor.TOP_CENTER: 8,
    Anchor.TOP_RIGHT: 9,
}


def _ass_time(seconds: float) -> str:
    minutes = int(seconds) // 60
    return f"0:{minutes:02d}:{seconds - minutes * 60:05.2f}"


def _ass_colour(style: TextStyle) -> str:
    color = style.color
    return f"&H00{color.b:02X}{color.g:02X}{color.r:02X}"


def typewriter_script(text: str, position: TextPosition, style: TextStyle) -> str:
    """Render an ASS script revealing ``text`` one character at a time.

    Each event shows one more character than the previous; the last event
    holds the full text until the end of the clip.
    """
    alignment = _ASS_ALIGNMENT.get(position.anchor, 5)
    lines = [
        "[Script Info]",
        "Title: Typewriter Effect",
        "",
        "[V4+ Styles]",
        "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, "
        "OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, "
        "ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, "
        "MarginL, MarginR, MarginV, Encoding",
        f"Style: Default,Arial,{style.effective_font_size},{_ass_colour(style)},"
        "&H000000FF,&H00000000,&H80000000,0,0,0,0,100,100,0,0,1,2,0,5,10,10,10,1",
        "",
        "[Events]",
        "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text",
    ]
    step = 1.0 / TYPEWRITER_CHARS_PER_SECOND
    count = len(text)
    for i in range(1, count + 1):
        start = i * step
        end = (i + 1) * step if i < count else TYPEWRITER_HOLD_SECONDS
        lines.append(
            f"Dialogue: 0,{_ass_time(start)},{_ass_time(end)},Default,,0,0,0,,"
            f"{{\\an{alignment}}}{text[:i]}"
        )
    return "\n".join(lines) + "\n"


@recipe(AnimatedTextRequest)
def animated_text(request: AnimatedTextRequest, ctx: RecipeContext) -> CompiledPlan:
    """Draw text that fades in, slides in from the left, or types itself out.

    The typewriter animation renders through a generated ASS script placed
    next to the output; the engine writes it before encoding.
    """
    if not request.text:
        raise PreconditionError("Animated text needs non-empty text")
    x, y = _animated_xy(request.position)
    text = request.text.replace("'", "\\'")
    style = request.style
    auxiliary: list[AuxiliaryFile] = []

    if request.animation is TextAnimation.FADE_IN:
        vf = _drawtext(text, style, x, y, "alpha='if(lt(t,1), t/1, 1)'")
    elif request.animation is TextAnimation.SLIDE_IN:
        vf = _drawtext(text, style, f"'if(lt(t,1), -text_w + (t*({x} + text_w)), {x})'", y)
    else:
        script = AuxiliaryFile(
            request.output.parent / TYPEWRITER_SCRIPT_NAME,
            typewriter_script(request.text, request.position, style),
        )
        auxiliary.append(script)
        vf = f"subtitles='{quote_path(script.path)}'"

    cmd = [
        ctx.flag,
        "-i",
        str(request.input),
        "-vf",
        vf,
        "-c:v",
        "libx264",
        "-c:a",
        "copy",
        str(request.output),
    ]
    return CompiledPlan.of(
        [ffmpeg(cmd, f"animated text ({request.animation.value})")],
        [request.output],
        auxiliary=auxiliary,
    )


@recipe(TimecodeRequest)
def timecode(request: TimecodeRequest, ctx: RecipeContext) -> CompiledPlan:
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        TIMECODE_DRAWTEXT,
        ["-c:v", "libx264", "-c:a", "copy"],
        "burn timecode",
    )


@recipe(PipRequest)
def pip(request: PipRequest, ctx: RecipeContext) -> CompiledPlan:
    """Inset the overlay video at 30% of its width over the base video."""
    graph = FilterGraph()
    graph.chain(PIP_SCALE, inputs=["1:v"], outputs=["overlay_scaled"])
    graph.chain(
        f"overlay={request.position.to_overlay()}",
        inputs=["0:v", "overlay_scaled"],
        outputs=["v"],
    )
    return _two_input_overlay(
        ctx.flag, request.base, request.overlay, graph, request.output, "picture in picture"
    )


@recipe(RemoveBackgroundRequest)
def remove_background(request: RemoveBackgroundRequest, ctx: RecipeContext) -> CompiledPlan:
    key = (
        f"chromakey=color={request.color.to_ffmpeg()}"
        f":similarity={CHROMAKEY_SIMILARITY}:blend={CHROMAKEY_BLEND}"
    )
    return filter_encode(
        ctx.flag,
        request.input,
        request.output,
        key,
        ["-c:v", "libx264", "-pix_fmt", "yuv420p", "-c:a", "copy"],
        "remove background",
    )


@recipe(OverlayRequest)
def overlay(request: OverlayRequest, ctx: RecipeContext) -> CompiledPlan:
    position = request.position.to_overlay()
    graph = FilterGraph()
    if request.opacity.is_opaque:
        graph.chain(f"overlay={position}", inputs=["0:v", "1:v"], outputs=["v"])
    else:
        graph.chain(
            _alpha_filters(request.opacity), inputs=["1:v"], outputs=["overlay_alpha"]
        )
        graph.chain(f"overlay={position}", inputs=["0:v", "overlay_alpha"], outputs=["v"])
    return _two_input_overlay(
        ctx.flag, request.base, request.overlay, graph, request.output, "overlay"
    )
