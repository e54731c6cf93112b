"""Bitrate allocation for size- and bitrate-targeted compression."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from ffrecipe.exceptions import PreconditionError

MIN_TOTAL_BPS = 50_000
MIN_VIDEO_BPS = 50_000
AUDIO_SHARE = 0.08
AUDIO_MIN_BPS = 96_000
AUDIO_MAX_BPS = 160_000

# Video bitrates used when a quality preset is encoded in two passes
QUALITY_TWO_PASS_BITRATES = {
    "low": "1000k",
    "medium": "2000k",
    "high": "4000k",
    "ultra": "8000k",
}


def null_sink() -> str:
    """Platform null device for analysis-only passes."""
    return "NUL" if os.name == "nt" else "/dev/null"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclass(frozen=True)
class BitrateAllocation:
    """Video and audio bitrates in bits per second."""

    video_bps: float
    audio_bps: float

    @property
    def video_kbps(self) -> int:
        return math.floor(self.video_bps / 1000)

    @property
    def audio_kbps(self) -> int:
        return math.floor(self.audio_bps / 1000)

    @property
    def total_bps(self) -> float:
        return self.video_bps + self.audio_bps


def audio_share(total_bps: float) -> float:
    """Audio gets 8% of the total, clamped to [96 kbps, 160 kbps]."""
    return _clamp(total_bps * AUDIO_SHARE, AUDIO_MIN_BPS, AUDIO_MAX_BPS)


def allocate_for_size(target_bytes: int, duration_seconds: float) -> BitrateAllocation:
    """Split the bitrate implied by a file size across video and audio.

    Raises:
        PreconditionError: If the duration is not positive.
    """
    if duration_seconds <= 0:
        raise PreconditionError("Cannot target a size for a file with no duration")
    total = max(target_bytes * 8.0 / duration_seconds, MIN_TOTAL_BPS)
    audio = audio_share(total)
    video = max(total - audio, MIN_VIDEO_BPS)
    return BitrateAllocation(video, audio)


def allocate_for_bitrate(target_bps: int) -> BitrateAllocation:
    """Use the target as the video rate and derive audio from the same share."""
    video = max(target_bps // 1000, MIN_VIDEO_BPS // 1000) * 1000
    return BitrateAllocation(float(video), audio_share(target_bps))
