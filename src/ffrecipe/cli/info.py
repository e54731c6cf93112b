"""CLI info command."""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import click

from ffrecipe.cli.runner import cli_errors, get_state
from ffrecipe.cli.video import INPUT_FILE
from ffrecipe.core.formatting import (
    format_bitrate,
    format_duration,
    format_file_size,
    get_resolution_label,
)
from ffrecipe.probe import MediaInfo


RULE = "-" * 40


def format_human(path: Path, info: MediaInfo) -> str:
    """Render probed properties as an aligned report."""
    lines = [
        "Media Information",
        RULE,
        f"File:          {path}",
        f"Duration:      {info.duration:.2f}s ({format_duration(info.duration)})",
    ]
    if info.width and info.height:
        lines.append(
            f"Resolution:    {info.width}x{info.height} "
            f"({get_resolution_label(info.width, info.height)})"
        )
        lines.append(f"Aspect Ratio:  {info.width / info.height:.2f}")
    lines += [
        f"Frame Rate:    {info.frame_rate:.2f} fps",
        f"Video Codec:   {info.video_codec}",
        f"Video Bitrate: {format_bitrate(info.video_bitrate)}",
        f"Audio Codec:   {info.audio_codec}",
        f"Audio Bitrate: {format_bitrate(info.audio_bitrate)}",
        f"Total Bitrate: {format_bitrate(info.total_bitrate)}",
        f"File Size:     {format_file_size(info.file_size)}",
        RULE,
    ]
    return "\n".join(lines)


def format_json(path: Path, info: MediaInfo) -> str:
    data = {"file": str(path), **dataclasses.asdict(info)}
    return json.dumps(data, indent=2)


@click.command("info")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    help="Output format (default: human)",
)
@click.pass_context
def info_command(ctx: click.Context, input_path: Path, output_format: str) -> None:
    """Show duration, resolution, codecs and bitrates of INPUT."""
    state = get_state(ctx)
    with cli_errors():
        info = state.probe.get_media_info(input_path)

    if output_format == "json":
        click.echo(format_json(input_path, info))
    else:
        click.echo(format_human(input_path, info))
