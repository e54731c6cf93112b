"""Audio commands."""

from __future__ import annotations

from pathlib import Path

import click

from ffrecipe.cli.params import ValueType
from ffrecipe.cli.runner import execute, get_state
from ffrecipe.cli.video import INPUT_FILE
from ffrecipe.compiler.requests import AdjustVolumeRequest, ExtractAudioRequest
from ffrecipe.values import AudioFormat, Time, VolumeAdjustment


@click.command("extract-audio")
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.option(
    "--format",
    "audio_format",
    type=ValueType(AudioFormat.parse, "audio format"),
    default="mp3",
    show_default=True,
    help="Audio format: mp3, wav, m4a or ogg.",
)
@click.option("--start", type=ValueType(Time.parse, "time"), default=None, help="Range start.")
@click.option("--end", type=ValueType(Time.parse, "time"), default=None, help="Range end.")
@click.pass_context
def extract_audio_command(
    ctx: click.Context,
    input_path: Path,
    audio_format: AudioFormat,
    start: Time | None,
    end: Time | None,
) -> None:
    """Extract the audio track of INPUT, optionally between --start and --end."""
    state = get_state(ctx)
    suffix = "audio" if start is None and end is None else "audio_range"
    output = state.output_path(input_path, suffix, audio_format.value)
    execute(
        state,
        ExtractAudioRequest(
            input=input_path, output=output, format=audio_format, start=start, end=end
        ),
    )


# Negative gains such as -5db must not be taken for options
@click.command("volume", context_settings={"ignore_unknown_options": True})
@click.argument("input_path", metavar="INPUT", type=INPUT_FILE)
@click.argument("adjustment", type=ValueType(VolumeAdjustment.parse, "volume"))
@click.pass_context
def volume_command(
    ctx: click.Context, input_path: Path, adjustment: VolumeAdjustment
) -> None:
    """Adjust the volume of INPUT (e.g. +10db, -5db or 50%)."""
    state = get_state(ctx)
    output = state.output_path(input_path, "volume_adjusted", "mp4")
    execute(
        state, AdjustVolumeRequest(input=input_path, output=output, adjustment=adjustment)
    )
