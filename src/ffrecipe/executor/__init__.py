"""Execution engine for compiled plans."""

from ffrecipe.executor.engine import ExecutionEngine
from ffrecipe.executor.interface import (
    ExecutionMode,
    ExecutionResult,
    InvocationOutcome,
)
from ffrecipe.executor.progress import (
    ProgressReporter,
    ProgressUpdate,
    parse_progress_line,
)

__all__ = [
    "ExecutionEngine",
    "ExecutionMode",
    "ExecutionResult",
    "InvocationOutcome",
    "ProgressReporter",
    "ProgressUpdate",
    "parse_progress_line",
]
