"""Subprocess utilities for external tool invocation.

A single wrapper around ``subprocess.run`` used for short, captured runs
such as ffprobe queries. Long-running encoder invocations are streamed by
the execution engine instead.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg/ffprobe invocation
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def command_name(args: list[str]) -> str:
    """Return the basename of the executable in ``args``."""
    return Path(args[0]).name if args else "unknown"


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    capture_output: bool = True,
    text: bool = True,
    errors: str = "replace",
    **kwargs: Any,
) -> tuple[str, str, int]:
    """Run an external command and capture its output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds, or None to wait indefinitely.
        capture_output: Capture stdout/stderr (default True).
        text: Return text instead of bytes (default True).
        errors: Error handling mode for text decoding (default "replace").
        **kwargs: Additional subprocess.run arguments.

    Returns:
        Tuple of (stdout, stderr, returncode).

    Raises:
        subprocess.TimeoutExpired: If the command times out.
        OSError: If the executable cannot be started.

    Example:
        >>> stdout, stderr, rc = run_command(["ffprobe", "-version"])
        >>> if rc == 0:
        ...     print(stdout.splitlines()[0])
    """
    str_args = [str(arg) for arg in args]
    name = command_name(str_args)

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()
    try:
        result = subprocess.run(  # nosec B603 - args are built by the compiler
            str_args,
            capture_output=capture_output,
            text=text,
            errors=errors,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={"command": name, "timeout_seconds": timeout},
        )
        raise

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )
    return result.stdout or "", result.stderr or "", result.returncode
