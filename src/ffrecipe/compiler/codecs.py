"""Copy-versus-transcode decisions based on container extensions.

Stream copy is preferred whenever the output container can carry the input
stream as-is. The tables below list the container pairs that cannot, and
the encoder to use instead. Video and audio are decided independently.
"""

from __future__ import annotations

from pathlib import Path

COPY = "copy"

# (input extension, output extension) -> video encoder
VIDEO_TRANSCODE: dict[tuple[str, str], str] = {
    # VP8/VP9 and arbitrary Matroska video cannot be muxed into MP4
    ("webm", "mp4"): "libx264",
    ("mkv", "mp4"): "libx264",
}

# (input extension, output extension) -> audio encoder
AUDIO_TRANSCODE: dict[tuple[str, str], str] = {
    ("webm", "mp4"): "aac",
    ("wmv", "mp4"): "aac",
    ("mkv", "mp4"): "aac",
    ("mp4", "webm"): "libopus",
    ("avi", "webm"): "libopus",
    ("mov", "webm"): "libopus",
}


def _extension(path: Path | str) -> str:
    return Path(path).suffix.lower().lstrip(".")


def resolve_video_codec(input_path: Path | str, output_path: Path | str) -> str:
    """Return ``copy`` or the encoder the output container requires."""
    key = (_extension(input_path), _extension(output_path))
    return VIDEO_TRANSCODE.get(key, COPY)


def resolve_audio_codec(input_path: Path | str, output_path: Path | str) -> str:
    """Return ``copy`` or the encoder the output container requires."""
    key = (_extension(input_path), _extension(output_path))
    return AUDIO_TRANSCODE.get(key, COPY)


def stream_codec_args(video_codec: str, audio_codec: str) -> list[str]:
    """Codec flags for a video+audio output.

    Collapses to ``-c copy`` when both streams are copied. A transcoded
    video stream gets ``-pix_fmt yuv420p`` for player compatibility.
    """
    if video_codec == COPY and audio_codec == COPY:
        return ["-c", COPY]
    args = ["-c:v", video_codec]
    if video_codec != COPY:
        args += ["-pix_fmt", "yuv420p"]
    args += ["-c:a", audio_codec]
    return args


def video_copy_args(video_codec: str) -> list[str]:
    """``-c copy`` when video can be copied, else transcode video only."""
    if video_codec == COPY:
        return ["-c", COPY]
    return ["-c:v", video_codec, "-c:a", COPY]
