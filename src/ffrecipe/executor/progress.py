"""Encoder progress parsing.

ffmpeg writes a status line to stderr as it encodes::

    frame= 1234 fps= 30 q=28.0 size=  2048kB time=00:01:23.45 bitrate=5000.0kbits/s speed=2.0x

``parse_progress_line`` turns such a line into a ``ProgressUpdate``;
``ProgressReporter`` rewrites a single terminal status line from the
updates, no more often than its refresh interval, and surfaces error lines
immediately.
"""

from __future__ import annotations

import re
import sys
import time
from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_INTERVAL_MS = 200

_TIME_RE = re.compile(r"time=(\d{2}):(\d{2}):(\d{2})\.(\d{2})")
_FRAME_RE = re.compile(r"frame=\s*(\d+)")
_FPS_RE = re.compile(r"fps=\s*([\d.]+)")
_SPEED_RE = re.compile(r"speed=\s*([\d.]+)x")
_BITRATE_RE = re.compile(r"bitrate=\s*([\d.]+)\s*(\w+)bits/s")

# Prefixes of the banner, stream listing and filter log lines
BANNER_PREFIXES = (
    "ffmpeg version",
    "  built with",
    "  configuration:",
    "  lib",
    "Input #",
    "  Metadata:",
    "  Duration:",
    "    Stream #",
    "Stream mapping:",
    "Press [q]",
    "Output #",
    "[",
)

ERROR_KEYWORDS = ("error", "Error", "failed")

CLEAR_LINE = "\r\x1b[K"


@dataclass(frozen=True)
class ProgressUpdate:
    """One parsed status line."""

    hours: int
    minutes: int
    seconds: int
    centiseconds: int
    frame: int | None = None
    fps: float | None = None
    speed: float | None = None
    bitrate: str | None = None

    @property
    def elapsed_seconds(self) -> float:
        return self.hours * 3600 + self.minutes * 60 + self.seconds + self.centiseconds / 100

    def render(self) -> str:
        parts = [
            f"time={self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"
            f".{self.centiseconds:02d}"
        ]
        if self.frame is not None:
            parts.append(f"frame={self.frame}")
        if self.fps is not None:
            parts.append(f"fps={self.fps:.1f}")
        if self.speed is not None:
            parts.append(f"speed={self.speed:.2f}x")
        if self.bitrate is not None:
            parts.append(f"bitrate={self.bitrate}")
        return " ".join(parts)


def _search_int(pattern: re.Pattern[str], line: str) -> int | None:
    match = pattern.search(line)
    return int(match.group(1)) if match else None


def _search_float(pattern: re.Pattern[str], line: str) -> float | None:
    match = pattern.search(line)
    if match is None:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def parse_progress_line(line: str) -> ProgressUpdate | None:
    """Parse an encoder status line.

    Args:
        line: A line from the encoder's stderr.

    Returns:
        The parsed update, or None if the line carries no ``time=`` field.
    """
    match = _TIME_RE.search(line)
    if match is None:
        return None

    bitrate = None
    bitrate_match = _BITRATE_RE.search(line)
    if bitrate_match:
        try:
            bitrate = f"{float(bitrate_match.group(1)):.1f}{bitrate_match.group(2)}"
        except ValueError:
            bitrate = None

    return ProgressUpdate(
        hours=int(match.group(1)),
        minutes=int(match.group(2)),
        seconds=int(match.group(3)),
        centiseconds=int(match.group(4)),
        frame=_search_int(_FRAME_RE, line),
        fps=_search_float(_FPS_RE, line),
        speed=_search_float(_SPEED_RE, line),
        bitrate=bitrate,
    )


def is_banner_line(line: str) -> bool:
    """Return True for banner, stream listing, filter log and blank lines."""
    return not line.strip() or line.startswith(BANNER_PREFIXES)


def is_error_line(line: str) -> bool:
    return any(keyword in line for keyword in ERROR_KEYWORDS)


class ProgressReporter:
    """Throttled single-line progress display.

    Args:
        interval_ms: Minimum wall time between two status line rewrites.
        write: Output function, ``sys.stderr.write`` by default.
        clock: Monotonic clock in seconds, injectable for tests.
    """

    def __init__(
        self,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        write: Callable[[str], object] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._interval = interval_ms / 1000.0
        self._write = write or sys.stderr.write
        self._clock = clock
        self._last_update: float | None = None
        self._drawn = False
        self.last: ProgressUpdate | None = None

    def feed(self, line: str) -> None:
        """Consume one stderr line."""
        line = line.rstrip("\r\n")
        if is_banner_line(line):
            return

        update = parse_progress_line(line)
        if update is not None:
            self.last = update
            now = self._clock()
            if self._last_update is None or now - self._last_update >= self._interval:
                self._write(f"{CLEAR_LINE}  {update.render()}")
                self._drawn = True
                self._last_update = now
        elif is_error_line(line):
            self._write(f"\n{line}\n")

    def finish(self) -> None:
        """End the status line once the process has exited."""
        if self._drawn:
            self._write("\n")
            self._drawn = False
