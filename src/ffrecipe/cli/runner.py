"""Glue between CLI commands, the compiler and the execution engine."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click

from ffrecipe.compiler import compile_request
from ffrecipe.compiler.requests import Request
from ffrecipe.config import AppConfig
from ffrecipe.exceptions import FFRecipeError
from ffrecipe.executor import ExecutionEngine, ExecutionResult
from ffrecipe.outputs import default_output_dir, default_output_path
from ffrecipe.probe import ProbeFacade

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Objects shared by every command of one CLI run.

    Attributes:
        config: Resolved configuration.
        engine: Engine configured for the selected mode.
        probe: Media prober handed to the compiler.
        out: Explicit ``--out`` path, if given.
    """

    config: AppConfig
    engine: ExecutionEngine
    probe: ProbeFacade
    out: Path | None = None

    def output_path(self, input_path: Path, suffix: str, ext: str) -> Path:
        """Default output for a single-file result."""
        with cli_errors():
            return default_output_path(
                input_path, suffix, ext, out=self.out, output_dir=self.config.output_dir
            )

    def output_dir(self, input_path: Path, suffix: str) -> Path:
        """Default directory for a multi-file result."""
        with cli_errors():
            return default_output_dir(
                input_path, suffix, out=self.out, output_dir=self.config.output_dir
            )


def get_state(ctx: click.Context) -> CliState:
    return ctx.find_object(dict)["state"]


@contextmanager
def cli_errors() -> Iterator[None]:
    """Convert ffrecipe errors into click errors with a non-zero exit."""
    try:
        yield
    except FFRecipeError as e:
        logger.debug("Command failed: %s", e, exc_info=True)
        raise click.ClickException(str(e)) from e


def execute(state: CliState, request: Request) -> ExecutionResult:
    """Compile ``request``, run it and report what it produced.

    Captured prober output is written to stdout. Filter log lines (detection
    reports) and output paths are written to stderr.
    """
    with cli_errors():
        plan = compile_request(request, state.probe, overwrite=state.config.overwrite)
        result = state.engine.run(plan)

    if result.stdout:
        click.echo(result.stdout, nl=not result.stdout.endswith("\n"))
    for outcome in result.outcomes:
        for line in outcome.log:
            click.echo(line, err=True)
    for output in plan.outputs:
        click.echo(f"Output: {output}", err=True)
    return result
