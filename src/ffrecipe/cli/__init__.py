"""CLI module for ffrecipe."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ffrecipe.cli.runner import CliState, cli_errors
from ffrecipe.config import get_config
from ffrecipe.executor import ExecutionEngine, ExecutionMode
from ffrecipe.logging import configure_logging
from ffrecipe.probe import FFprobeFacade

logger = logging.getLogger(__name__)


def _echo_stderr(message: str) -> None:
    click.echo(message, err=True)


def _select_mode(dry_run: bool, explain: bool) -> ExecutionMode:
    if explain:
        return ExecutionMode.EXPLAIN
    if dry_run:
        return ExecutionMode.DRY_RUN
    return ExecutionMode.LIVE


@click.group()
@click.version_option(package_name="ffrecipe")
@click.option(
    "--out",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path override (full path to the output file or directory).",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory where derived output files are written.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the generated commands without running them.",
)
@click.option(
    "--explain",
    is_flag=True,
    default=False,
    help="Print the commands and the reasoning behind them without running them.",
)
@click.option(
    "--overwrite",
    "-y",
    is_flag=True,
    default=False,
    help="Overwrite existing output files.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.ffrecipe/config.yaml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    out: Path | None,
    output_dir: Path | None,
    dry_run: bool,
    explain: bool,
    overwrite: bool,
    config_path: Path | None,
    log_level: str | None,
    log_json: bool,
) -> None:
    """ffrecipe - describe a media edit, get the right ffmpeg commands."""
    ctx.ensure_object(dict)

    with cli_errors():
        config = get_config(
            config_path=config_path,
            output_dir=output_dir,
            overwrite=True if overwrite else None,
            log_level=log_level,
            log_format="json" if log_json else None,
        )
    configure_logging(config.log_level, config.log_format)
    logger.debug("Resolved configuration", extra={"config": config.model_dump(mode="json")})

    # Preserve doubles passed in by tests
    engine = ctx.obj.get("engine") or ExecutionEngine(
        mode=_select_mode(dry_run, explain),
        ffmpeg_path=config.ffmpeg_path,
        ffprobe_path=config.ffprobe_path,
        progress_interval_ms=config.progress_interval_ms,
        echo=_echo_stderr,
    )
    probe = ctx.obj.get("probe") or FFprobeFacade(config.ffprobe_path)
    ctx.obj["state"] = CliState(config=config, engine=engine, probe=probe, out=out)


# Defer import to avoid circular dependency
def _register_commands():
    from ffrecipe.cli.audio import extract_audio_command, volume_command
    from ffrecipe.cli.combine import (
        crossfade_command,
        merge_command,
        montage_command,
        tile_command,
        watermark_command,
    )
    from ffrecipe.cli.info import info_command
    from ffrecipe.cli.video import (
        compress_command,
        convert_command,
        gif_command,
        resize_command,
        rotate_command,
        speed_command,
        timelapse_command,
        trim_command,
    )

    main.add_command(convert_command)
    main.add_command(gif_command)
    main.add_command(compress_command)
    main.add_command(trim_command)
    main.add_command(resize_command)
    main.add_command(speed_command)
    main.add_command(timelapse_command)
    main.add_command(rotate_command)
    main.add_command(extract_audio_command)
    main.add_command(volume_command)
    main.add_command(montage_command)
    main.add_command(montage_command, name="collage")
    main.add_command(tile_command)
    main.add_command(crossfade_command)
    main.add_command(merge_command)
    main.add_command(watermark_command)
    main.add_command(info_command)


_register_commands()
