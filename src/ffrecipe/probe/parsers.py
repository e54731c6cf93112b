"""Parsing of ffprobe JSON output into MediaInfo."""

from __future__ import annotations

from typing import Any

from ffrecipe.probe.interface import MIN_DURATION_SECONDS, NO_AUDIO, MediaInfo


def parse_int(value: Any) -> int:
    """Parse an ffprobe integer field (often a string), 0 when absent."""
    if value is None:
        return 0
    try:
        return int(value)
    except (ValueError, TypeError):
        return 0


def parse_duration(value: Any) -> float | None:
    """Parse an ffprobe duration string into seconds, or None."""
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def parse_frame_rate(value: str | None) -> float:
    """Parse ``30/1`` or ``30000/1001`` into frames per second.

    Returns 0.0 for missing, malformed or ``0/0`` rates.
    """
    if not value:
        return 0.0
    numerator, sep, denominator = value.partition("/")
    try:
        if not sep:
            return float(numerator)
        den = float(denominator)
        return float(numerator) / den if den > 0 else 0.0
    except ValueError:
        return 0.0


def _first_stream(streams: list[dict], codec_type: str) -> dict | None:
    for stream in streams:
        if stream.get("codec_type") == codec_type:
            return stream
    return None


def clamp_duration(seconds: float) -> float:
    return max(seconds, MIN_DURATION_SECONDS)


def parse_ffprobe_output(data: dict) -> MediaInfo:
    """Build a MediaInfo from ``-show_format -show_streams`` JSON.

    Args:
        data: Decoded JSON document.

    Returns:
        The parsed media info. The duration falls back to the first
        video stream's duration when the container does not report one.

    Raises:
        KeyError: If the document has no ``format`` section.
    """
    fmt = data["format"]
    streams = data.get("streams") or []
    video = _first_stream(streams, "video") or {}
    audio = _first_stream(streams, "audio")

    duration = parse_duration(fmt.get("duration"))
    if duration is None:
        duration = parse_duration(video.get("duration")) or 0.0

    frame_rate = parse_frame_rate(
        video.get("r_frame_rate") or video.get("avg_frame_rate")
    )

    return MediaInfo(
        duration=duration,
        width=parse_int(video.get("width")),
        height=parse_int(video.get("height")),
        frame_rate=frame_rate,
        video_codec=video.get("codec_name") or "unknown",
        video_bitrate=parse_int(video.get("bit_rate")),
        audio_codec=(audio or {}).get("codec_name") or NO_AUDIO,
        audio_bitrate=parse_int((audio or {}).get("bit_rate")),
        total_bitrate=parse_int(fmt.get("bit_rate")),
        file_size=parse_int(fmt.get("size")),
    )
