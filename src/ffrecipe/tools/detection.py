"""Locating the ffmpeg and ffprobe executables."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def find_tool(name: str, configured_path: Path | None = None) -> Path | None:
    """Find a tool executable.

    Args:
        name: Tool name (e.g., "ffmpeg").
        configured_path: Optional configured path override.

    Returns:
        Path to tool executable, or None if not found.
    """
    # Try configured path first
    if configured_path:
        if configured_path.is_file():
            return configured_path
        logger.warning(
            "Configured path for %s is not a file: %s", name, configured_path
        )

    # Fall back to PATH lookup
    which_result = shutil.which(name)
    if which_result:
        return Path(which_result)

    return None


def resolve_executable(name: str, configured_path: Path | None = None) -> str:
    """Return the executable to spawn for ``name``.

    Falls back to the bare name when the tool cannot be found, so that the
    spawn itself fails and is reported against the invocation.
    """
    path = find_tool(name, configured_path)
    if path is None:
        logger.debug("%s not found; spawning by name", name)
        return name
    return str(path)
