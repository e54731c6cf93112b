"""Execution modes and results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ffrecipe.compiler.invocation import Invocation


class ExecutionMode(Enum):
    """How the engine treats a compiled plan.

    DRY_RUN prints each invocation without running it. EXPLAIN does the same
    and also prints the compiler's notes. LIVE runs the invocations in order
    and stops at the first failure.
    """

    DRY_RUN = "dry-run"
    EXPLAIN = "explain"
    LIVE = "live"

    @property
    def executes(self) -> bool:
        return self is ExecutionMode.LIVE


@dataclass(frozen=True)
class InvocationOutcome:
    """Result of one executed invocation.

    Attributes:
        invocation: The invocation that ran.
        returncode: Process exit status.
        stdout: Captured standard output (prober invocations only).
        log: Filter log lines the encoder wrote, e.g. detection reports.
    """

    invocation: Invocation
    returncode: int
    stdout: str = ""
    log: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExecutionResult:
    """Result of running a plan.

    Attributes:
        mode: Mode the plan was run in.
        outcomes: One entry per invocation that completed successfully, in
            order. Empty outside live mode.
    """

    mode: ExecutionMode
    outcomes: tuple[InvocationOutcome, ...] = ()

    @property
    def completed(self) -> tuple[Invocation, ...]:
        return tuple(outcome.invocation for outcome in self.outcomes)

    @property
    def stdout(self) -> str:
        """Captured standard output of all invocations, joined."""
        return "".join(outcome.stdout for outcome in self.outcomes)
