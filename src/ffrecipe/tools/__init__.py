"""External tool discovery."""

from ffrecipe.tools.detection import find_tool, resolve_executable

__all__ = ["find_tool", "resolve_executable"]
