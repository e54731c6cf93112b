"""Default output path derivation."""

from __future__ import annotations

import logging
from pathlib import Path

from ffrecipe.exceptions import PreconditionError

logger = logging.getLogger(__name__)


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PreconditionError(f"Failed to create output directory {path}: {e}") from e


def default_output_path(
    input_path: Path,
    suffix: str,
    ext: str,
    out: Path | None = None,
    output_dir: Path | None = None,
) -> Path:
    """Return where an operation on ``input_path`` should write.

    An explicit ``out`` wins and its parent directory is created. Otherwise
    the result is ``<dir>/<stem>_<suffix>.<ext>``, where ``dir`` is
    ``output_dir`` (created if missing) or the input's own directory.

    Args:
        input_path: The operation's primary input.
        suffix: Label appended to the input's stem, e.g. ``compressed``.
        ext: Extension of the produced file, without the dot.
        out: Explicit output path.
        output_dir: Directory for derived output names.

    Raises:
        PreconditionError: If the input has no file name or a directory
            cannot be created.

    Example:
        >>> default_output_path(Path("clips/a.mov"), "trim", "mp4")
        PosixPath('clips/a_trim.mp4')
    """
    if out is not None:
        _ensure_dir(out.parent)
        return out

    stem = input_path.stem
    if not stem:
        raise PreconditionError(f"Invalid input filename: {input_path}")

    if output_dir is not None:
        _ensure_dir(output_dir)
        directory = output_dir
    else:
        directory = input_path.parent
    path = directory / f"{stem}_{suffix}.{ext}"
    logger.debug("Derived output path %s", path)
    return path


def default_output_dir(
    input_path: Path,
    suffix: str,
    out: Path | None = None,
    output_dir: Path | None = None,
) -> Path:
    """Return and create the directory for a multi-file result.

    Used by segmenting operations (streaming packages, splits, frame
    extraction). ``out`` or ``output_dir`` is used as-is when given;
    otherwise ``<input dir>/<stem>_<suffix>``.
    """
    if out is not None:
        directory = out
    elif output_dir is not None:
        directory = output_dir
    else:
        directory = input_path.parent / f"{input_path.stem}_{suffix}"
    _ensure_dir(directory)
    return directory
