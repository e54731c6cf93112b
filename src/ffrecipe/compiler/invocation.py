"""Invocation model produced by the compiler.

An invocation is one external program run: a program name plus an ordered
argument vector. A compiled request is a ``CompiledPlan`` holding the
invocations in execution order, the output paths worth reporting, any
auxiliary files that must exist before the first invocation runs, and
free-form notes shown in explain mode.
"""

from __future__ import annotations

import shlex
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

FFMPEG = "ffmpeg"
FFPROBE = "ffprobe"


@dataclass(frozen=True)
class Invocation:
    """A single program run.

    Attributes:
        program: Logical program name (``ffmpeg`` or ``ffprobe``). The
            engine maps it to a concrete executable path.
        args: Argument vector, excluding the program itself.
        description: Short human label shown in dry-run output.
    """

    program: str
    args: tuple[str, ...]
    description: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence of str/Path and freeze it
        object.__setattr__(self, "args", tuple(str(arg) for arg in self.args))

    def argv(self, executable: str | None = None) -> list[str]:
        """Return the full command line, optionally with a resolved executable."""
        return [executable or self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv())


def ffmpeg(args: Iterable[str | Path], description: str = "") -> Invocation:
    """Build an encoder invocation."""
    return Invocation(FFMPEG, tuple(str(a) for a in args), description)


def ffprobe(args: Iterable[str | Path], description: str = "") -> Invocation:
    """Build a prober invocation."""
    return Invocation(FFPROBE, tuple(str(a) for a in args), description)


def overwrite_flag(overwrite: bool) -> str:
    """Return the leading overwrite/no-overwrite flag."""
    return "-y" if overwrite else "-n"


@dataclass(frozen=True)
class AuxiliaryFile:
    """A text file the toolkit reads, e.g. a concat list or subtitle script."""

    path: Path
    content: str


@dataclass(frozen=True)
class CompiledPlan:
    """Result of compiling one request.

    Attributes:
        invocations: Invocations in the order they must run.
        outputs: Paths the caller should report once the plan has run.
        auxiliary: Files to write before the first invocation.
        notes: Rationale lines for explain mode.
    """

    invocations: tuple[Invocation, ...]
    outputs: tuple[Path, ...] = ()
    auxiliary: tuple[AuxiliaryFile, ...] = ()
    notes: tuple[str, ...] = field(default=())

    @classmethod
    def of(
        cls,
        invocations: Sequence[Invocation],
        outputs: Sequence[Path] = (),
        auxiliary: Sequence[AuxiliaryFile] = (),
        notes: Sequence[str] = (),
    ) -> CompiledPlan:
        return cls(tuple(invocations), tuple(outputs), tuple(auxiliary), tuple(notes))

    def __len__(self) -> int:
        return len(self.invocations)

    def __iter__(self):
        return iter(self.invocations)
