"""File size and bitrate targets used by compression."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ffrecipe.exceptions import ParseError
from ffrecipe.values.encoding import QualityPreset

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(b|kb|k|mb|m|gb|g)\s*$", re.IGNORECASE)
_BITRATE_RE = re.compile(
    r"^\s*(\d+(?:\.\d+)?)\s*([kmg])?\s*(?:bps|b/s|bit/s)?\s*$", re.IGNORECASE
)

# Binary multipliers for sizes
_SIZE_UNITS = {
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
}

# Decimal multipliers for bitrates, matching ffmpeg's own "k"/"M" suffixes
_BITRATE_UNITS = {None: 1, "k": 1000, "m": 1000**2, "g": 1000**3}

_QUALITY_SUFFIX = "-quality"


@dataclass(frozen=True)
class TargetSize:
    """Desired output size in bytes, parsed from e.g. ``10mb`` or ``800k``."""

    bytes: int

    @classmethod
    def parse(cls, raw: str) -> TargetSize:
        """Parse a size with a binary (1024-based) unit.

        Raises:
            ParseError: If the number or unit is missing or unknown.
        """
        match = _SIZE_RE.match(raw)
        if match is None:
            raise ParseError(
                f"Invalid size: {raw}", raw=raw, hint="10mb, 800k, 1.5gb"
            )
        number = float(match.group(1))
        unit = match.group(2).lower()
        return cls(round(number * _SIZE_UNITS[unit]))

    def __str__(self) -> str:
        if self.bytes >= 1024**3:
            return f"{self.bytes / 1024**3:.2f} GB"
        if self.bytes >= 1024**2:
            return f"{self.bytes / 1024**2:.2f} MB"
        if self.bytes >= 1024:
            return f"{self.bytes / 1024:.2f} KB"
        return f"{self.bytes} B"


@dataclass(frozen=True)
class TargetBitrate:
    """Desired total bitrate in bits per second, e.g. ``2M`` or ``800kbps``."""

    bits_per_second: int

    @classmethod
    def parse(cls, raw: str) -> TargetBitrate:
        """Parse a bitrate with an optional decimal unit.

        Raises:
            ParseError: On malformed input or a zero rate.
        """
        match = _BITRATE_RE.match(raw)
        if match is None:
            raise ParseError(
                f"Invalid bitrate: {raw}", raw=raw, hint="2M, 800k, or 1500kbps"
            )
        unit = match.group(2).lower() if match.group(2) else None
        bps = round(float(match.group(1)) * _BITRATE_UNITS[unit])
        if bps <= 0:
            raise ParseError("Bitrate must be greater than 0", raw=raw)
        return cls(bps)

    @property
    def kbps(self) -> int:
        return self.bits_per_second // 1000

    def to_ffmpeg(self) -> str:
        """Render as whole kilobits, e.g. ``800k``."""
        return f"{self.kbps}k"

    def __str__(self) -> str:
        if self.bits_per_second >= 1000**2:
            return f"{self.bits_per_second / 1000**2:.2f} Mbps"
        return f"{self.bits_per_second / 1000:.0f} kbps"


@dataclass(frozen=True)
class CompressTarget:
    """What a compression request aims for.

    Exactly one of ``size``, ``bitrate`` or ``quality`` is set.
    """

    size: TargetSize | None = None
    bitrate: TargetBitrate | None = None
    quality: QualityPreset | None = None

    def __post_init__(self) -> None:
        chosen = [v for v in (self.size, self.bitrate, self.quality) if v is not None]
        if len(chosen) != 1:
            raise ParseError("Compression needs exactly one target")

    @classmethod
    def parse(cls, raw: str) -> CompressTarget:
        """Parse a compression target.

        ``<preset>-quality`` selects a quality preset, a value ending in
        ``bps`` is a bitrate, and anything else is a file size.
        """
        text = raw.strip().lower()
        if text.endswith(_QUALITY_SUFFIX):
            return cls(quality=QualityPreset.parse(text[: -len(_QUALITY_SUFFIX)]))
        if text.endswith("bps"):
            return cls(bitrate=TargetBitrate.parse(text))
        return cls(size=TargetSize.parse(text))
