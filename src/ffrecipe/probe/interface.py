"""Probe facade contract consumed by the compiler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

# Smallest duration reported for a readable file
MIN_DURATION_SECONDS = 0.01

NO_AUDIO = "none"


@dataclass(frozen=True)
class MediaInfo:
    """Read-only snapshot of a media file's properties.

    Bitrates are in bits per second and ``file_size`` in bytes. Zero means
    the prober did not report a value. ``audio_codec`` is ``"none"`` when
    the file has no audio stream.
    """

    duration: float
    width: int = 0
    height: int = 0
    frame_rate: float = 0.0
    video_codec: str = "unknown"
    video_bitrate: int = 0
    audio_codec: str = NO_AUDIO
    audio_bitrate: int = 0
    total_bitrate: int = 0
    file_size: int = 0

    @property
    def has_audio(self) -> bool:
        return self.audio_codec != NO_AUDIO


class ProbeFacade(Protocol):
    """Source of media properties.

    Implementations must not cache results across calls; every query
    reflects the file as it is on disk now.
    """

    def duration_seconds(self, path: Path) -> float:
        """Return the container duration in seconds.

        Raises:
            ProbeError: If the file cannot be read or has no parseable
                duration.
        """
        ...

    def get_media_info(self, path: Path) -> MediaInfo:
        """Return structured properties of the file.

        Raises:
            ProbeError: If the file cannot be read.
        """
        ...
