"""Execution engine.

Runs a compiled plan's invocations strictly one at a time, in order. The
first invocation that exits non-zero, or cannot be spawned, stops the
sequence; nothing is retried and outputs already produced are left in
place. Encoder invocations are streamed so their progress can be shown;
prober invocations run with captured output.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import sys
import time
from collections import deque
from collections.abc import Callable
from pathlib import Path

from ffrecipe.compiler.invocation import FFMPEG, CompiledPlan, Invocation
from ffrecipe.core.subprocess_utils import run_command
from ffrecipe.exceptions import ExecutionError
from ffrecipe.executor.interface import (
    ExecutionMode,
    ExecutionResult,
    InvocationOutcome,
)
from ffrecipe.executor.progress import DEFAULT_INTERVAL_MS, ProgressReporter
from ffrecipe.tools.detection import resolve_executable

logger = logging.getLogger(__name__)

# Lines kept from stderr to explain a failure
STDERR_TAIL_LINES = 20

# Prefix of the log lines filters such as blackdetect and showinfo write
FILTER_LOG_PREFIX = "[Parsed_"


def _echo_stderr(message: str) -> None:
    sys.stderr.write(message + "\n")


class ExecutionEngine:
    """Runs compiled plans in dry-run, explain or live mode.

    Args:
        mode: Execution mode.
        ffmpeg_path: Configured encoder path; PATH is searched otherwise.
        ffprobe_path: Configured prober path; PATH is searched otherwise.
        show_progress: Draw a progress line while encoder invocations run.
        progress_interval_ms: Minimum time between progress line rewrites.
        echo: Receives the announcement lines; writes to stderr by default.
    """

    def __init__(
        self,
        mode: ExecutionMode = ExecutionMode.LIVE,
        ffmpeg_path: Path | None = None,
        ffprobe_path: Path | None = None,
        show_progress: bool = True,
        progress_interval_ms: int = DEFAULT_INTERVAL_MS,
        echo: Callable[[str], None] | None = None,
    ) -> None:
        self.mode = mode
        self._configured = {"ffmpeg": ffmpeg_path, "ffprobe": ffprobe_path}
        self._executables: dict[str, str] = {}
        self._show_progress = show_progress
        self._progress_interval_ms = progress_interval_ms
        self._echo = echo or _echo_stderr

    def executable(self, program: str) -> str:
        """Resolve the executable for a logical program name, once."""
        if program not in self._executables:
            self._executables[program] = resolve_executable(
                program, self._configured.get(program)
            )
        return self._executables[program]

    def run(self, plan: CompiledPlan) -> ExecutionResult:
        """Run ``plan`` according to the engine's mode.

        Returns:
            The result. Dry-run and explain results have no outcomes.

        Raises:
            ExecutionError: In live mode, when an invocation fails or cannot
                be spawned. Later invocations are not run.
        """
        if self.mode is ExecutionMode.EXPLAIN:
            for note in plan.notes:
                self._echo(f"[explain] {note}")

        if not self.mode.executes:
            for aux in plan.auxiliary:
                self._echo(f"Would write: {aux.path}")
            for invocation in plan.invocations:
                self._echo(self._announce(invocation))
            return ExecutionResult(self.mode)

        self._write_auxiliary(plan)
        outcomes = []
        total = len(plan.invocations)
        for index, invocation in enumerate(plan.invocations):
            self._echo(self._announce(invocation))
            logger.info(
                "Running step %d/%d: %s",
                index + 1,
                total,
                invocation.description or invocation.program,
                extra={"step": index + 1, "steps": total, "program": invocation.program},
            )
            outcomes.append(self._run_one(invocation, index))
        return ExecutionResult(self.mode, tuple(outcomes))

    def _announce(self, invocation: Invocation) -> str:
        prefix = "[explain] Running" if self.mode is ExecutionMode.EXPLAIN else "Running"
        return f"{prefix}: {invocation}"

    def _write_auxiliary(self, plan: CompiledPlan) -> None:
        for aux in plan.auxiliary:
            aux.path.parent.mkdir(parents=True, exist_ok=True)
            aux.path.write_text(aux.content, encoding="utf-8")
            logger.debug("Wrote auxiliary file %s", aux.path)

    def _run_one(self, invocation: Invocation, index: int) -> InvocationOutcome:
        argv = invocation.argv(self.executable(invocation.program))
        if invocation.program == FFMPEG:
            return self._stream(invocation, argv, index)
        return self._capture(invocation, argv, index)

    def _capture(
        self, invocation: Invocation, argv: list[str], index: int
    ) -> InvocationOutcome:
        try:
            stdout, stderr, returncode = run_command(argv)
        except OSError as e:
            raise ExecutionError(
                invocation, None, index, f"{invocation.program} could not be started: {e}"
            ) from e
        if returncode != 0:
            raise ExecutionError(
                invocation, returncode, index, _failure_message(invocation, returncode, stderr)
            )
        return InvocationOutcome(invocation, returncode, stdout=stdout)

    def _stream(
        self, invocation: Invocation, argv: list[str], index: int
    ) -> InvocationOutcome:
        logger.debug(
            "Executing command: %s",
            " ".join(argv),
            extra={"command": invocation.program, "arg_count": len(argv)},
        )
        start = time.monotonic()
        try:
            process = subprocess.Popen(  # nosec B603 - argv is built by the compiler
                argv,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ExecutionError(
                invocation, None, index, f"{invocation.program} could not be started: {e}"
            ) from e

        reporter = ProgressReporter(self._progress_interval_ms) if self._show_progress else None
        tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)
        log: list[str] = []
        assert process.stderr is not None
        with process.stderr:
            for line in process.stderr:
                tail.append(line.rstrip("\n"))
                if line.startswith(FILTER_LOG_PREFIX):
                    log.append(line.rstrip("\n"))
                if reporter is not None:
                    reporter.feed(line)
        returncode = process.wait()
        if reporter is not None:
            reporter.finish()

        logger.debug(
            "Step finished",
            extra={
                "program": invocation.program,
                "returncode": returncode,
                "elapsed_seconds": round(time.monotonic() - start, 3),
            },
        )
        if returncode != 0:
            raise ExecutionError(
                invocation,
                returncode,
                index,
                _failure_message(invocation, returncode, "\n".join(tail)),
            )
        return InvocationOutcome(invocation, returncode, log=tuple(log))


def _failure_message(invocation: Invocation, returncode: int, stderr: str) -> str:
    message = f"{invocation.program} failed with status {returncode}"
    lines = [line for line in stderr.splitlines() if line.strip()]
    if lines:
        message += f": {lines[-1].strip()}"
    return message
