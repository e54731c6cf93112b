"""Commands that combine several inputs into one output."""

from __future__ import annotations

from pathlib import Path

import click

from ffrecipe.cli.params import ValueType
from ffrecipe.cli.runner import execute, get_state
from ffrecipe.cli.video import INPUT_FILE
from ffrecipe.compiler.requests import (
    ConcatRequest,
    CrossfadeRequest,
    MontageRequest,
    TileRequest,
    WatermarkRequest,
)
from ffrecipe.values import (
    Duration,
    GridLayout,
    Opacity,
    WatermarkPosition,
    WatermarkSize,
)


@click.command("montage")
@click.argument("inputs", metavar="INPUT...", nargs=-1, required=True, type=INPUT_FILE)
@click.option(
    "--layout",
    type=ValueType(GridLayout.parse, "layout"),
    required=True,
    help="Grid layout as COLSxROWS, e.g. 2x2.",
)
@click.pass_context
def montage_command(ctx: click.Context, inputs: tuple[Path, ...], layout: GridLayout) -> None:
    """Arrange two or more videos in a grid."""
    if len(inputs) < 2:
        raise click.UsageError("A montage needs at least 2 video files")
    state = get_state(ctx)
    output = state.output_path(inputs[0], "montage", "mp4")
    execute(state, MontageRequest(inputs=inputs, output=output, layout=layout))


@click.command("tile")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("layout", type=ValueType(GridLayout.parse, "layout"))
@click.pass_context
def tile_command(ctx: click.Context, input_path: Path, layout: GridLayout) -> None:
    """Repeat INPUT in every cell of a LAYOUT grid, e.g. 2x2."""
    state = get_state(ctx)
    output = state.output_path(input_path, "tiled", "mp4")
    execute(state, TileRequest(input=input_path, output=output, layout=layout))


@click.command("crossfade")
@click.argument("first", type=INPUT_FILE)
@click.argument("second", type=INPUT_FILE)
@click.option(
    "--duration",
    type=ValueType(Duration.parse, "duration"),
    default="1s",
    show_default=True,
    help="Length of the cross-fade.",
)
@click.pass_context
def crossfade_command(
    ctx: click.Context, first: Path, second: Path, duration: Duration
) -> None:
    """Join FIRST and SECOND with a cross-fade."""
    state = get_state(ctx)
    output = state.output_path(first, "crossfade", "mp4")
    execute(
        state,
        CrossfadeRequest(first=first, second=second, output=output, duration=duration),
    )


@click.command("merge")
@click.argument("first", type=INPUT_FILE)
@click.argument("second", type=INPUT_FILE)
@click.pass_context
def merge_command(ctx: click.Context, first: Path, second: Path) -> None:
    """Play SECOND right after FIRST."""
    state = get_state(ctx)
    output = state.output_path(first, "merged", "mp4")
    execute(state, ConcatRequest(inputs=(first, second), output=output))


@click.command("watermark")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("logo", type=INPUT_FILE)
@click.option(
    "--position",
    type=ValueType(WatermarkPosition.parse, "position"),
    default="bottom-right",
    show_default=True,
    help="Corner (top-left, top-right, bottom-left, bottom-right) or X,Y.",
)
@click.option(
    "--opacity",
    type=ValueType(Opacity.parse, "opacity"),
    default="1.0",
    show_default=True,
    help="Logo opacity, 0.0 to 1.0 or a percentage.",
)
@click.option(
    "--size",
    type=ValueType(WatermarkSize.parse, "size"),
    default=None,
    help="Logo size: fraction of the video width (0.2, 20%) or pixels (200, 200x100).",
)
@click.pass_context
def watermark_command(
    ctx: click.Context,
    input_path: Path,
    logo: Path,
    position: WatermarkPosition,
    opacity: Opacity,
    size: WatermarkSize | None,
) -> None:
    """Overlay the LOGO image on INPUT."""
    state = get_state(ctx)
    output = state.output_path(input_path, "watermarked", "mp4")
    execute(
        state,
        WatermarkRequest(
            input=input_path,
            logo=logo,
            output=output,
            position=position,
            opacity=opacity,
            size=size,
        ),
    )
