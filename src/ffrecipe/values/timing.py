"""Time, duration and duration-derived parameters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ffrecipe.exceptions import ParseError
from ffrecipe.values._common import format_number

_TIME_RE = re.compile(r"^(\d+)(?::(\d{1,2}))?(?::(\d{1,2}))?$")
_DURATION_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*s?$", re.IGNORECASE)
_SPLIT_PARTS_RE = re.compile(r"^(?:into\s+)?(\d+)(?:\s+parts?)?$")
_CONDITION_RE = re.compile(r"^\s*duration\s*(<|>|=)\s*(.+)$", re.IGNORECASE)

# Tolerance used when comparing a probed duration for equality
DURATION_EQUALS_TOLERANCE = 0.1


@dataclass(frozen=True)
class Time:
    """A wall-clock position inside a media file.

    Accepted shapes are ``SS``, ``M:SS`` and ``H:MM:SS``. Components are
    stored as given; ``90`` stays ninety seconds rather than being folded
    into minutes.
    """

    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def parse(cls, raw: str) -> Time:
        """Parse a time string.

        Raises:
            ParseError: If the string is not ``SS``, ``M:SS`` or ``H:MM:SS``.
        """
        text = raw.strip()
        match = _TIME_RE.match(text)
        if match is None:
            raise ParseError(
                f"Invalid time format: {raw}", raw=raw, hint="30, 1:30 or 1:05:30"
            )
        first, second, third = match.groups()
        if third is not None:
            return cls(int(first), int(second), int(third))
        if second is not None:
            return cls(0, int(first), int(second))
        return cls(0, 0, int(first))

    def to_ffmpeg(self) -> str:
        """Render as the zero-padded ``HH:MM:SS`` form ffmpeg accepts."""
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def to_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def __str__(self) -> str:
        if self.hours > 0:
            return f"{self.hours}:{self.minutes:02d}:{self.seconds:02d}"
        if self.minutes > 0:
            return f"{self.minutes}:{self.seconds:02d}"
        return str(self.seconds)


@dataclass(frozen=True)
class Duration:
    """A non-negative span in seconds, written ``2``, ``2s`` or ``1.5s``."""

    seconds: float

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise ParseError("Duration must be non-negative", raw=str(self.seconds))

    @classmethod
    def parse(cls, raw: str) -> Duration:
        """Parse a duration string.

        Raises:
            ParseError: If the string is not a non-negative number of seconds.
        """
        match = _DURATION_RE.match(raw.strip())
        if match is None:
            raise ParseError(
                f"Invalid duration format: {raw}", raw=raw, hint="2s, 1.5s, or 2"
            )
        return cls(float(match.group(1)))

    def to_seconds(self) -> float:
        return self.seconds

    def __str__(self) -> str:
        return f"{format_number(self.seconds)}s"


@dataclass(frozen=True)
class SplitMode:
    """How to cut a video into segments.

    Exactly one of ``every`` (a segment length) or ``parts`` (a number of
    equal parts, at least two) is set.
    """

    every: Duration | None = None
    parts: int | None = None

    @classmethod
    def parse(cls, raw: str) -> SplitMode:
        """Parse ``every 30s``, ``into 3 parts`` or a bare part count.

        Raises:
            ParseError: On any other shape, or fewer than two parts.
        """
        text = raw.strip().lower()
        hint = "'every 30s' or 'into 3 parts'"
        if text.startswith("every "):
            return cls(every=Duration.parse(text[len("every ") :].strip()))
        match = _SPLIT_PARTS_RE.match(text)
        if match is None:
            raise ParseError(f"Invalid split mode: {raw}", raw=raw, hint=hint)
        parts = int(match.group(1))
        if parts < 2:
            raise ParseError("Split must be into at least 2 parts", raw=raw)
        return cls(parts=parts)


class ComparisonOperator(Enum):
    """Comparison applied by a processing condition."""

    LESS_THAN = "<"
    GREATER_THAN = ">"
    EQUALS = "="


@dataclass(frozen=True)
class ProcessingCondition:
    """A predicate over a file's duration, e.g. ``duration < 30s``."""

    operator: ComparisonOperator
    threshold: Duration

    @classmethod
    def parse(cls, raw: str) -> ProcessingCondition:
        """Parse a condition string.

        Raises:
            ParseError: If the string is not ``duration <op> <duration>``.
        """
        match = _CONDITION_RE.match(raw.strip())
        if match is None:
            raise ParseError(
                f"Invalid condition: {raw}", raw=raw, hint="'duration < 30s'"
            )
        operator = ComparisonOperator(match.group(1))
        return cls(operator, Duration.parse(match.group(2)))

    def matches(self, duration_seconds: float) -> bool:
        """Evaluate the condition against a probed duration."""
        threshold = self.threshold.seconds
        if self.operator is ComparisonOperator.LESS_THAN:
            return duration_seconds < threshold
        if self.operator is ComparisonOperator.GREATER_THAN:
            return duration_seconds > threshold
        return abs(duration_seconds - threshold) < DURATION_EQUALS_TOLERANCE
