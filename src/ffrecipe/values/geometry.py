"""Speed, orientation, resolution and frame-region parameters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ffrecipe.exceptions import ParseError
from ffrecipe.values._common import format_number, lookup_alias

_SPEED_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*x\s*$", re.IGNORECASE)
_DIMENSIONS_RE = re.compile(r"^\s*(\d+)\s*x\s*(\d+)\s*$", re.IGNORECASE)
_REGION_RE = re.compile(r"^\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*$")

ALLOWED_ROTATIONS = frozenset({0, 90, 180, 270})


@dataclass(frozen=True)
class SpeedFactor:
    """Playback speed multiplier written as ``2x`` or ``0.5x``."""

    factor: float

    def __post_init__(self) -> None:
        if self.factor <= 0:
            raise ParseError("Speed factor must be positive", raw=str(self.factor))

    @classmethod
    def parse(cls, raw: str) -> SpeedFactor:
        match = _SPEED_RE.match(raw)
        if match is None:
            raise ParseError(f"Invalid factor: {raw}", raw=raw, hint="2x, 0.5x")
        return cls(float(match.group(1)))

    def __str__(self) -> str:
        return f"{format_number(self.factor)}x"


@dataclass(frozen=True)
class RotateDegrees:
    """Clockwise rotation, normalized modulo 360 to a right angle."""

    degrees: int

    def __post_init__(self) -> None:
        normalized = self.degrees % 360
        if normalized not in ALLOWED_ROTATIONS:
            raise ParseError(
                f"Unsupported rotation: {self.degrees}",
                raw=str(self.degrees),
                hint="0, 90, 180 or 270",
            )
        object.__setattr__(self, "degrees", normalized)

    @classmethod
    def parse(cls, raw: str) -> RotateDegrees:
        text = raw.strip().lower().removesuffix("deg").removesuffix("°").strip()
        try:
            degrees = int(text)
        except ValueError:
            raise ParseError(
                f"Invalid rotation: {raw}", raw=raw, hint="90, 180 or 270"
            ) from None
        return cls(degrees)


class FlipDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, raw: str) -> FlipDirection:
        return lookup_alias(
            raw,
            {
                "horizontal": cls.HORIZONTAL,
                "h": cls.HORIZONTAL,
                "vertical": cls.VERTICAL,
                "v": cls.VERTICAL,
            },
            "flip direction",
            "horizontal or vertical",
        )


class MirrorDirection(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, raw: str) -> MirrorDirection:
        return lookup_alias(
            raw,
            {
                "horizontal": cls.HORIZONTAL,
                "h": cls.HORIZONTAL,
                "vertical": cls.VERTICAL,
                "v": cls.VERTICAL,
            },
            "mirror direction",
            "horizontal or vertical",
        )


class SplitScreenOrientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, raw: str) -> SplitScreenOrientation:
        return lookup_alias(
            raw,
            {
                "horizontal": cls.HORIZONTAL,
                "side-by-side": cls.HORIZONTAL,
                "side": cls.HORIZONTAL,
                "vertical": cls.VERTICAL,
                "top-bottom": cls.VERTICAL,
                "top": cls.VERTICAL,
                "bottom": cls.VERTICAL,
            },
            "split screen orientation",
            "horizontal or vertical",
        )


# Named resolution presets -> (width, height, display label)
RESOLUTION_PRESETS: dict[str, tuple[int, int, str]] = {
    "720p": (1280, 720, "720p"),
    "1080p": (1920, 1080, "1080p"),
    "1440p": (2560, 1440, "1440p"),
    "2160p": (3840, 2160, "4K"),
    "4k": (3840, 2160, "4K"),
}


@dataclass(frozen=True)
class ResizeTarget:
    """Output frame size from a preset (``720p``, ``4k``) or ``WxH``."""

    width: int
    height: int
    label: str | None = None

    @classmethod
    def parse(cls, raw: str) -> ResizeTarget:
        text = raw.strip().lower()
        preset = RESOLUTION_PRESETS.get(text)
        if preset is not None:
            width, height, label = preset
            return cls(width, height, label)
        if text.endswith("p"):
            raise ParseError(
                f"Unknown preset: {raw}", raw=raw, hint="720p, 1080p, 4k"
            )
        match = _DIMENSIONS_RE.match(text)
        if match is None:
            raise ParseError(
                f"Invalid size: {raw}", raw=raw, hint="1280x720 or 720p"
            )
        return cls(int(match.group(1)), int(match.group(2)))

    def to_ffmpeg_scale(self) -> str:
        return f"scale={self.width}:{self.height}"

    def __str__(self) -> str:
        return self.label or f"{self.width}x{self.height}"


@dataclass(frozen=True)
class BlurRegion:
    """Rectangle ``x,y,w,h`` in source pixels; width and height are positive."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width == 0 or self.height == 0:
            raise ParseError(
                "Region width and height must be greater than 0", raw=str(self)
            )

    @classmethod
    def parse(cls, raw: str) -> BlurRegion:
        match = _REGION_RE.match(raw)
        if match is None:
            raise ParseError(
                f"Invalid region format: {raw}", raw=raw, hint="100,100,200,200"
            )
        x, y, width, height = (int(group) for group in match.groups())
        return cls(x, y, width, height)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.width},{self.height}"


@dataclass(frozen=True)
class BlurType:
    """Blur a rectangular region, or the whole frame when ``region`` is None."""

    region: BlurRegion | None = None
    strength: int = 10

    @classmethod
    def parse(cls, raw: str) -> BlurType:
        text = raw.strip().lower()
        if text in ("full", "all", "frame", "whole"):
            return cls()
        return cls(region=BlurRegion.parse(raw))


@dataclass(frozen=True)
class GridLayout:
    """Grid of ``cols x rows`` cells used by montage, collage and tile."""

    cols: int
    rows: int

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ParseError(
                "Layout columns and rows must be greater than 0", raw=str(self)
            )

    @classmethod
    def parse(cls, raw: str) -> GridLayout:
        match = _DIMENSIONS_RE.match(raw)
        if match is None:
            raise ParseError(
                f"Invalid layout format: {raw}", raw=raw, hint="2x2, 3x1"
            )
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def total_cells(self) -> int:
        return self.cols * self.rows

    def __str__(self) -> str:
        return f"{self.cols}x{self.rows}"
