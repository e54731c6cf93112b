"""Exception hierarchy for ffrecipe.

Four kinds of failure are distinguished so callers can report them
differently:

- ParseError: a loosely formatted parameter could not be validated.
- PreconditionError: a request is unsatisfiable before anything runs.
- ProbeError: the prober could not read a required media property.
- ExecutionError: a spawned process failed or could not be spawned.

ConfigError covers an unreadable or invalid configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ffrecipe.compiler.invocation import Invocation


class FFRecipeError(Exception):
    """Base class for all ffrecipe errors."""

    pass


class ParseError(FFRecipeError, ValueError):
    """Raised when a parameter string does not match any accepted shape.

    Attributes:
        raw: The offending input exactly as supplied.
        hint: Short description of the accepted shapes, if any.
    """

    def __init__(self, message: str, raw: str = "", hint: str | None = None) -> None:
        self.raw = raw
        self.hint = hint
        if hint:
            message = f"{message} (try {hint})"
        super().__init__(message)


class PreconditionError(FFRecipeError):
    """Raised when a request cannot be compiled into a valid invocation."""

    pass


class ProbeError(FFRecipeError):
    """Raised when media properties cannot be read from a file."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to probe {path}: {message}")


class ExecutionError(FFRecipeError):
    """Raised when an invocation exits non-zero or cannot be spawned.

    Attributes:
        invocation: The invocation that failed.
        returncode: Exit status, or None if the process never started.
        index: Zero-based position of the invocation in its sequence.
    """

    def __init__(
        self,
        invocation: Invocation,
        returncode: int | None,
        index: int = 0,
        message: str | None = None,
    ) -> None:
        self.invocation = invocation
        self.returncode = returncode
        self.index = index
        if message is None:
            if returncode is None:
                message = f"{invocation.program} could not be started"
            else:
                message = f"{invocation.program} failed with status {returncode}"
        super().__init__(message)


class ConfigError(FFRecipeError):
    """Raised when the configuration file or environment is invalid."""

    pass
