"""ffprobe-backed implementation of the ProbeFacade protocol."""

from __future__ import annotations

import json
import logging
import subprocess  # nosec B404 - only used for TimeoutExpired
from pathlib import Path

from ffrecipe.core.subprocess_utils import run_command
from ffrecipe.exceptions import ProbeError
from ffrecipe.probe.interface import MediaInfo
from ffrecipe.probe.parsers import clamp_duration, parse_duration, parse_ffprobe_output
from ffrecipe.tools.detection import resolve_executable

logger = logging.getLogger(__name__)

# Prevent hangs on corrupted files
PROBE_TIMEOUT = 60


class FFprobeFacade:
    """Probe media files by running ffprobe.

    Every call spawns ffprobe afresh; nothing is cached.
    """

    def __init__(self, ffprobe_path: Path | None = None) -> None:
        """Initialize the facade.

        Args:
            ffprobe_path: Optional explicit path to ffprobe. If not given,
                ffprobe is looked up on PATH.
        """
        self._executable = resolve_executable("ffprobe", ffprobe_path)

    def duration_seconds(self, path: Path) -> float:
        """Return the container duration, at least 0.01 seconds.

        Raises:
            ProbeError: If ffprobe fails or prints no parseable duration.
        """
        stdout = self._run(
            path,
            [
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
            ],
        )
        duration = parse_duration(stdout.strip())
        if duration is None:
            raise ProbeError(path, f"no parseable duration in {stdout.strip()!r}")
        return clamp_duration(duration)

    def get_media_info(self, path: Path) -> MediaInfo:
        """Return structured properties read from the format and first streams.

        Raises:
            ProbeError: If ffprobe fails or its output is not valid JSON.
        """
        stdout = self._run(
            path,
            [
                "-v",
                "error",
                "-print_format",
                "json",
                "-show_format",
                "-show_streams",
            ],
        )
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise ProbeError(path, f"invalid ffprobe output: {e}") from e
        if not isinstance(data, dict) or "format" not in data:
            raise ProbeError(
                path,
                "missing 'format' in ffprobe output; "
                "file may be corrupted or not a media file",
            )
        return parse_ffprobe_output(data)

    def _run(self, path: Path, args: list[str]) -> str:
        if not path.exists():
            raise ProbeError(path, "file not found")
        try:
            stdout, stderr, returncode = run_command(
                [self._executable, *args, path], timeout=PROBE_TIMEOUT
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(path, f"ffprobe timed out after {e.timeout}s") from e
        except OSError as e:
            raise ProbeError(path, f"ffprobe could not be started: {e}") from e
        if returncode != 0:
            message = stderr.strip() or f"ffprobe exited with status {returncode}"
            raise ProbeError(path, message)
        return stdout
