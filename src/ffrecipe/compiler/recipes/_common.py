"""Helpers shared by recipe modules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from ffrecipe.compiler.invocation import AuxiliaryFile, CompiledPlan, ffmpeg
from ffrecipe.probe.interface import ProbeFacade

CONCAT_LIST_NAME = "concat_list.txt"
PALETTE_NAME = "palette.png"


def single(
    args: Iterable[str | Path],
    output: Path | None = None,
    description: str = "",
    notes: Sequence[str] = (),
) -> CompiledPlan:
    """Plan with one encoder invocation writing ``output``."""
    outputs = (output,) if output is not None else ()
    return CompiledPlan.of([ffmpeg(args, description)], outputs, notes=notes)


def filter_encode(
    flag: str,
    input_path: Path,
    output: Path,
    video_filter: str,
    codec_args: Sequence[str],
    description: str = "",
) -> CompiledPlan:
    """``<flag> -i <input> -vf <filter> <codec args> <output>``."""
    cmd = [flag, "-i", str(input_path), "-vf", video_filter, *codec_args, str(output)]
    return single(cmd, output, description)


def audio_filter_encode(
    flag: str,
    input_path: Path,
    output: Path,
    audio_filter: str,
    video_codec: str,
    description: str = "",
) -> CompiledPlan:
    """``<flag> -i <input> -af <filter> -c:v <codec> -c:a aac <output>``."""
    cmd = [
        flag,
        "-i",
        str(input_path),
        "-af",
        audio_filter,
        "-c:v",
        video_codec,
        "-c:a",
        "aac",
        str(output),
    ]
    return single(cmd, output, description)


def quote_path(path: Path) -> str:
    """Absolute path with single quotes escaped for concat lists and filters."""
    return str(path.absolute()).replace("'", "\\'")


def concat_list(paths: Sequence[Path], output: Path) -> AuxiliaryFile:
    """Concat demuxer list placed next to ``output``."""
    lines = [f"file '{quote_path(path)}'\n" for path in paths]
    return AuxiliaryFile(output.parent / CONCAT_LIST_NAME, "".join(lines))


def palette_path(output: Path) -> Path:
    return output.parent / PALETTE_NAME


def probe_once(durations: dict[Path, float], probe: ProbeFacade, path: Path) -> float:
    """Return the duration of ``path``, probing it at most once per compile."""
    if path not in durations:
        durations[path] = probe.duration_seconds(path)
    return durations[path]
