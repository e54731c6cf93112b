"""Multi-source composition: grids, split screens, comparisons and transitions."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ffrecipe.compiler import grid
from ffrecipe.compiler.codecs import resolve_audio_codec
from ffrecipe.compiler.graph import FilterGraph
from ffrecipe.compiler.invocation import CompiledPlan, ffmpeg
from ffrecipe.compiler.recipes._common import probe_once, single
from ffrecipe.compiler.registry import RecipeContext, recipe
from ffrecipe.compiler.requests import (
    CompareRequest,
    CrossfadeRequest,
    MontageRequest,
    SlideshowRequest,
    SplitScreenRequest,
    SyncCamerasRequest,
    TileRequest,
    TransitionRequest,
)
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values import SplitScreenOrientation
from ffrecipe.values._common import format_number

logger = logging.getLogger(__name__)

# Fit inside a 720x720 box keeping the aspect ratio
COMPARE_SCALE = "scale=iw*min(720/iw\\,720/ih):ih*min(720/iw\\,720/ih)"

TRANSITION_SECONDS = 1.0

SLIDESHOW_WIDTH = 1280
SLIDESHOW_HEIGHT = 720
SLIDESHOW_FPS = "30"


def _input_args(paths: Sequence[Path]) -> list[str]:
    args: list[str] = []
    for path in paths:
        args += ["-i", str(path)]
    return args


def _grid_plan(
    flag: str,
    inputs: Sequence[Path],
    graph: FilterGraph,
    audio_source: Path,
    output: Path,
    description: str,
) -> CompiledPlan:
    cmd = [
        flag,
        *_input_args(inputs),
        "-filter_complex",
        graph.render(mapped=[grid.OUTPUT_LABEL]),
        "-map",
        f"[{grid.OUTPUT_LABEL}]",
        "-map",
        "0:a?",
        "-c:v",
        "libx264",
        "-pix_fmt",
        "yuv420p",
        "-c:a",
        resolve_audio_codec(audio_source, output),
        str(output),
    ]
    return single(cmd, output, description)


@recipe(MontageRequest)
def montage(request: MontageRequest, ctx: RecipeContext) -> CompiledPlan:
    """Letterbox each input into a cell and stack the cells row by row."""
    if not request.inputs:
        raise PreconditionError("Montage needs at least one video")
    grid.check_capacity(len(request.inputs), request.layout)

    graph = FilterGraph()
    cells = grid.cell_labels(len(request.inputs))
    for index, label in enumerate(cells):
        graph.chain(grid.letterbox(), inputs=[f"{index}:v"], outputs=[label])
    width = grid.compose(graph, cells, request.layout)
    logger.debug("Montage of %d videos on %s, %dpx wide", len(cells), request.layout, width)
    return _grid_plan(
        ctx.flag,
        request.inputs,
        graph,
        request.inputs[0],
        request.output,
        f"montage {request.layout}",
    )


@recipe(TileRequest)
def tile(request: TileRequest, ctx: RecipeContext) -> CompiledPlan:
    """Repeat one video in every cell of the layout."""
    count = request.layout.total_cells
    graph = FilterGraph()
    graph.chain(grid.letterbox(), inputs=["0:v"], outputs=["scaled"])
    if count == 1:
        cells = ["scaled"]
    else:
        cells = grid.cell_labels(count)
        graph.chain(f"split={count}", inputs=["scaled"], outputs=cells)
    grid.compose(graph, cells, request.layout)
    return _grid_plan(
        ctx.flag, [request.input], graph, request.input, request.output, f"tile {request.layout}"
    )


@recipe(SyncCamerasRequest)
def sync_cameras(request: SyncCamerasRequest, ctx: RecipeContext) -> CompiledPlan:
    """Show several camera angles on a near-square grid.

    Cells are stretched to the cell size rather than letterboxed.
    """
    if len(request.inputs) < 2:
        raise PreconditionError("Sync cameras requires at least 2 videos")
    layout = grid.auto_layout(len(request.inputs))
    graph = FilterGraph()
    cells = grid.cell_labels(len(request.inputs))
    for index, label in enumerate(cells):
        graph.chain(
            f"scale={grid.CELL_WIDTH}:{grid.CELL_HEIGHT}",
            inputs=[f"{index}:v"],
            outputs=[label],
        )
    grid.compose(graph, cells, layout)
    return _grid_plan(
        ctx.flag,
        request.inputs,
        graph,
        request.inputs[0],
        request.output,
        f"sync {len(cells)} cameras on {layout}",
    )


@recipe(SplitScreenRequest)
def split_screen(request: SplitScreenRequest, ctx: RecipeContext) -> CompiledPlan:
    graph = FilterGraph()
    if request.orientation is SplitScreenOrientation.HORIZONTAL:
        graph.chain("scale=iw/2:-1", inputs=["0:v"], outputs=["v0"])
        graph.chain("scale=iw/2:-1", inputs=["1:v"], outputs=["v1"])
        graph.chain("hstack", inputs=["v0", "v1"], outputs=["h"])
        graph.chain("scale=iw:-2", inputs=["h"], outputs=["v"])
    else:
        graph.chain("scale=-1:ih/2", inputs=["0:v"], outputs=["v0"])
        graph.chain("scale=-1:ih/2", inputs=["1:v"], outputs=["v1"])
        graph.chain("vstack", inputs=["v0", "v1"], outputs=["stacked"])
        graph.chain("scale=-2:ih", inputs=["stacked"], outputs=["v"])

    cmd = [
        ctx.flag,
        *_input_args([request.first, request.second]),
        "-filter_complex",
        graph.render(mapped=["v"]),
        "-map",
        "[v]",
        "-c:v",
        "libx264",
        "-pix_fmt",
        "yuv420p",
        "-c:a",
        resolve_audio_codec(request.first, request.output),
        "-map",
        "0:a?",
        str(request.output),
    ]
    return single(cmd, request.output, f"split screen ({request.orientation.value})")


def _compare_graph() -> FilterGraph:
    graph = FilterGraph()
    graph.chain(COMPARE_SCALE, inputs=["0:v"], outputs=["v0"])
    graph.chain(COMPARE_SCALE, inputs=["1:v"], outputs=["v1"])
    graph.chain("hstack", inputs=["v0", "v1"], outputs=["h"])
    graph.chain("scale=-2:720", inputs=["h"], outputs=["v"])
    return graph


def _metrics_graph() -> FilterGraph:
    # Each scaled source feeds both the PSNR and the SSIM filter
    graph = FilterGraph()
    graph.chain([COMPARE_SCALE, "split=2"], inputs=["0:v"], outputs=["a0", "a1"])
    graph.chain([COMPARE_SCALE, "split=2"], inputs=["1:v"], outputs=["b0", "b1"])
    graph.chain("psnr=stats_file=psnr.log", inputs=["a0", "b0"])
    graph.chain("ssim=stats_file=ssim.log", inputs=["a1", "b1"])
    return graph


@recipe(CompareRequest)
def compare(request: CompareRequest, ctx: RecipeContext) -> CompiledPlan:
    """Render the two inputs side by side.

    With ``metrics`` a second invocation computes PSNR and SSIM between the
    scaled inputs, writing ``psnr.log`` and ``ssim.log`` in the working
    directory and discarding the video.
    """
    cmd = [
        ctx.flag,
        *_input_args([request.first, request.second]),
        "-filter_complex",
        _compare_graph().render(mapped=["v"]),
        "-map",
        "[v]",
        "-map",
        "0:a?",
        "-c:v",
        "libx264",
        "-pix_fmt",
        "yuv420p",
        "-c:a",
        resolve_audio_codec(request.first, request.output),
        str(request.output),
    ]
    invocations = [ffmpeg(cmd, "side-by-side comparison")]
    notes = []
    if request.metrics:
        metrics = [
            *_input_args([request.first, request.second]),
            "-lavfi",
            _metrics_graph().render(),
            "-f",
            "null",
            "-",
        ]
        invocations.append(ffmpeg(metrics, "PSNR/SSIM metrics"))
        notes.append("Metrics are written to psnr.log and ssim.log.")
    return CompiledPlan.of(invocations, [request.output], notes=notes)


def transition_offset(durations: Sequence[float], transition: float) -> float:
    """Start of a transition that ends with the shorter source."""
    return max(min(durations) - transition, 0.0)


def _xfade_plan(
    flag: str,
    first: Path,
    second: Path,
    output: Path,
    xfade: str,
    description: str,
    notes: Sequence[str],
) -> CompiledPlan:
    graph = FilterGraph().chain(xfade, inputs=["0:v", "1:v"], outputs=["v"])
    cmd = [
        flag,
        *_input_args([first, second]),
        "-filter_complex",
        graph.render(mapped=["v"]),
        "-map",
        "[v]",
        "-map",
        "0:a?",
        "-c:v",
        "libx264",
        "-c:a",
        "copy",
        str(output),
    ]
    return CompiledPlan.of([ffmpeg(cmd, description)], [output], notes=notes)


@recipe(CrossfadeRequest)
def crossfade(request: CrossfadeRequest, ctx: RecipeContext) -> CompiledPlan:
    """Cross-dissolve from the first video into the second.

    Both sources are probed once; the fade ends where the shorter one does.
    """
    fade = request.duration.seconds
    durations: dict[Path, float] = {}
    offset = transition_offset(
        [
            probe_once(durations, ctx.probe, request.first),
            probe_once(durations, ctx.probe, request.second),
        ],
        fade,
    )
    xfade = f"xfade=transition=fade:duration={format_number(fade)}:offset={format_number(offset)}"
    return _xfade_plan(
        ctx.flag,
        request.first,
        request.second,
        request.output,
        xfade,
        "crossfade",
        [f"Crossfade of {format_number(fade)}s starting at {format_number(offset)}s."],
    )


@recipe(TransitionRequest)
def transition(request: TransitionRequest, ctx: RecipeContext) -> CompiledPlan:
    """One-second xfade transition placed by probing both sources."""
    durations: dict[Path, float] = {}
    offset = transition_offset(
        [
            probe_once(durations, ctx.probe, request.first),
            probe_once(durations, ctx.probe, request.second),
        ],
        TRANSITION_SECONDS,
    )
    xfade = (
        f"xfade=transition={request.transition.value}"
        f":duration={format_number(TRANSITION_SECONDS)}:offset={format_number(offset)}"
    )
    return _xfade_plan(
        ctx.flag,
        request.first,
        request.second,
        request.output,
        xfade,
        f"{request.transition.name.lower()} transition",
        [f"Transition starts at {format_number(offset)}s."],
    )


@recipe(SlideshowRequest)
def slideshow(request: SlideshowRequest, ctx: RecipeContext) -> CompiledPlan:
    """Show each image for ``duration`` and concatenate them at 30 fps."""
    if not request.images:
        raise PreconditionError("Slideshow needs at least one image")
    seconds = format_number(request.duration.seconds)
    cmd = [ctx.flag]
    graph = FilterGraph()
    cells = grid.cell_labels(len(request.images))
    for index, (image, label) in enumerate(zip(request.images, cells)):
        cmd += ["-loop", "1", "-t", seconds, "-i", str(image)]
        graph.chain(
            [grid.letterbox(SLIDESHOW_WIDTH, SLIDESHOW_HEIGHT), "setsar=1"],
            inputs=[f"{index}:v"],
            outputs=[label],
        )
    graph.chain(f"concat=n={len(cells)}:v=1:a=0", inputs=cells, outputs=["outv"])
    cmd += [
        "-filter_complex",
        graph.render(mapped=["outv"]),
        "-map",
        "[outv]",
        "-c:v",
        "libx264",
        "-pix_fmt",
        "yuv420p",
        "-r",
        SLIDESHOW_FPS,
        str(request.output),
    ]
    return single(cmd, request.output, f"slideshow of {len(cells)} images")
