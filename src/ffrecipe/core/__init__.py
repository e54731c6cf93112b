"""Shared helpers: subprocess wrapper and display formatting."""

from ffrecipe.core.formatting import (
    format_bitrate,
    format_duration,
    format_file_size,
    get_resolution_label,
)
from ffrecipe.core.subprocess_utils import run_command

__all__ = [
    "format_bitrate",
    "format_duration",
    "format_file_size",
    "get_resolution_label",
    "run_command",
]
