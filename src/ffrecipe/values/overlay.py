"""Placement, sizing, opacity and text styling for overlays.

Named anchors resolve to symbolic ffmpeg expressions that reference the
main frame (``W``/``H``) and the overlay (``w``/``h``, or ``tw``/``th`` for
drawtext), so the same graph works at any input resolution.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum

from ffrecipe.exceptions import ParseError
from ffrecipe.values._common import lookup_alias, normalize, parse_hex_color

_COORDINATES_RE = re.compile(r"^\s*(\d+)\s*,\s*(\d+)\s*$")
_PIXEL_SIZE_RE = re.compile(r"^\s*(\d+)(?:\s*x\s*(\d+))?\s*$", re.IGNORECASE)
_BARE_NUMBER_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")

# Distance kept between an anchored overlay and the frame edge
EDGE_MARGIN = 10


def _parse_coordinates(raw: str) -> tuple[int, int] | None:
    match = _COORDINATES_RE.match(raw)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


@dataclass(frozen=True)
class Opacity:
    """Overlay opacity in ``[0.0, 1.0]``."""

    value: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ParseError(
                "Opacity must be between 0.0 and 1.0", raw=str(self.value)
            )

    @classmethod
    def parse(cls, raw: str) -> Opacity:
        text = raw.strip()
        try:
            if text.endswith("%"):
                return cls(float(text[:-1]) / 100.0)
            return cls(float(text))
        except ValueError:
            raise ParseError(
                f"Invalid opacity: {raw}", raw=raw, hint="0.5 or 50%"
            ) from None

    @property
    def is_opaque(self) -> bool:
        return self.value >= 1.0

    def __str__(self) -> str:
        return f"{self.value:.2f}"


class Anchor(Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    TOP_CENTER = "top-center"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_CENTER = "bottom-center"
    CENTER = "center"


_CORNER_ALIASES = {
    "top-left": Anchor.TOP_LEFT,
    "topleft": Anchor.TOP_LEFT,
    "top-right": Anchor.TOP_RIGHT,
    "topright": Anchor.TOP_RIGHT,
    "bottom-left": Anchor.BOTTOM_LEFT,
    "bottomleft": Anchor.BOTTOM_LEFT,
    "bottom-right": Anchor.BOTTOM_RIGHT,
    "bottomright": Anchor.BOTTOM_RIGHT,
}

_CENTER_ALIASES = {"center": Anchor.CENTER, "centre": Anchor.CENTER}

_EDGE_CENTER_ALIASES = {
    "top-center": Anchor.TOP_CENTER,
    "topcenter": Anchor.TOP_CENTER,
    "top": Anchor.TOP_CENTER,
    "bottom-center": Anchor.BOTTOM_CENTER,
    "bottomcenter": Anchor.BOTTOM_CENTER,
    "bottom": Anchor.BOTTOM_CENTER,
}


def _anchor_xy(anchor: Anchor, width: str, height: str) -> tuple[str, str]:
    """Return (x, y) expressions for an anchor given overlay size symbols."""
    m = EDGE_MARGIN
    left, top = str(m), str(m)
    right = f"W-{width}-{m}"
    bottom = f"H-{height}-{m}"
    middle_x = f"(W-{width})/2"
    middle_y = f"(H-{height})/2"
    return {
        Anchor.TOP_LEFT: (left, top),
        Anchor.TOP_RIGHT: (right, top),
        Anchor.TOP_CENTER: (middle_x, top),
        Anchor.BOTTOM_LEFT: (left, bottom),
        Anchor.BOTTOM_RIGHT: (right, bottom),
        Anchor.BOTTOM_CENTER: (middle_x, bottom),
        Anchor.CENTER: (middle_x, middle_y),
    }[anchor]


@dataclass(frozen=True)
class WatermarkPosition:
    """A frame corner or explicit ``x,y`` pixel coordinates."""

    anchor: Anchor | None = Anchor.BOTTOM_RIGHT
    x: int = 0
    y: int = 0

    @classmethod
    def parse(cls, raw: str) -> WatermarkPosition:
        text = normalize(raw)
        anchor = _CORNER_ALIASES.get(text)
        if anchor is not None:
            return cls(anchor)
        coordinates = _parse_coordinates(text)
        if coordinates is None:
            raise ParseError(
                f"Invalid position: {raw}",
                raw=raw,
                hint="top-left, top-right, bottom-left, bottom-right, or 100,50",
            )
        return cls(None, *coordinates)

    def to_overlay(self) -> str:
        """Render as the ``x:y`` argument of the overlay filter."""
        if self.anchor is None:
            return f"{self.x}:{self.y}"
        x, y = _anchor_xy(self.anchor, "w", "h")
        return f"{x}:{y}"


class PipPosition(Enum):
    """Where a picture-in-picture inset sits."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"

    @classmethod
    def parse(cls, raw: str) -> PipPosition:
        aliases = {**_CORNER_ALIASES, **_CENTER_ALIASES}
        anchor = lookup_alias(
            raw,
            aliases,
            "PIP position",
            "top-left, top-right, bottom-left, bottom-right, or center",
        )
        return cls(anchor.value)

    def to_overlay(self) -> str:
        x, y = _anchor_xy(Anchor(self.value), "w", "h")
        return f"{x}:{y}"


@dataclass(frozen=True)
class TextPosition:
    """A named text anchor or explicit ``x,y`` coordinates."""

    anchor: Anchor | None = Anchor.BOTTOM_CENTER
    x: int = 0
    y: int = 0

    @classmethod
    def parse(cls, raw: str) -> TextPosition:
        text = normalize(raw)
        aliases = {**_CORNER_ALIASES, **_CENTER_ALIASES, **_EDGE_CENTER_ALIASES}
        anchor = aliases.get(text)
        if anchor is not None:
            return cls(anchor)
        coordinates = _parse_coordinates(text)
        if coordinates is None:
            raise ParseError(
                f"Invalid position: {raw}",
                raw=raw,
                hint=(
                    "top-left, top-right, top-center, bottom-left, "
                    "bottom-right, bottom-center, center, or 100,50"
                ),
            )
        return cls(None, *coordinates)

    def to_drawtext(self) -> tuple[str, str]:
        """Return drawtext ``(x, y)`` expressions."""
        if self.anchor is None:
            return str(self.x), str(self.y)
        return _anchor_xy(self.anchor, "tw", "th")


@dataclass(frozen=True)
class WatermarkSize:
    """Watermark scale as a fraction of the main width, or in pixels.

    A bare decimal in ``[0, 1]`` that contains a decimal point is read as a
    fraction (``0.2`` is 20%, ``1.0`` is 100%); any other bare number is a
    pixel width.
    """

    fraction: float | None = None
    width: int | None = None
    height: int | None = None

    @classmethod
    def parse(cls, raw: str) -> WatermarkSize:
        text = raw.strip()
        if text.endswith("%"):
            try:
                fraction = float(text[:-1]) / 100.0
            except ValueError:
                raise ParseError(
                    f"Invalid size: {raw}", raw=raw, hint="20%, 0.2, 200x100, or 200"
                ) from None
            if not 0.0 <= fraction <= 1.0:
                raise ParseError("Percentage must be between 0% and 100%", raw=raw)
            return cls(fraction=fraction)
        if _BARE_NUMBER_RE.match(text):
            if "." not in text:
                return cls._pixels(raw, int(text))
            number = float(text)
            if number <= 1.0:
                return cls(fraction=number)
            if not math.isfinite(number):
                raise ParseError(f"Size out of range: {raw}", raw=raw, hint="200x100 or 200")
            return cls._pixels(raw, int(number))
        match = _PIXEL_SIZE_RE.match(text)
        if match is None:
            raise ParseError(
                f"Invalid size: {raw}", raw=raw, hint="20%, 0.2, 200x100, or 200"
            )
        height = int(match.group(2)) if match.group(2) else None
        return cls._pixels(raw, int(match.group(1)), height)

    @classmethod
    def _pixels(cls, raw: str, width: int, height: int | None = None) -> WatermarkSize:
        if width < 1 or (height is not None and height < 1):
            raise ParseError("Pixel size must be at least 1", raw=raw, hint="200x100 or 200")
        return cls(width=width, height=height)

    @property
    def is_fraction(self) -> bool:
        return self.fraction is not None


@dataclass(frozen=True)
class TextColor:
    """An RGB colour from a name or ``#RRGGBB``."""

    r: int = 255
    g: int = 255
    b: int = 255

    @classmethod
    def parse(cls, raw: str) -> TextColor:
        named = NAMED_COLORS.get(normalize(raw))
        if named is not None:
            return cls(*named)
        rgb = parse_hex_color(raw)
        if rgb is None:
            raise ParseError(
                f"Invalid color: {raw}",
                raw=raw,
                hint="named color like 'white' or hex like '#FFFFFF'",
            )
        return cls(*rgb)

    def to_ffmpeg(self) -> str:
        return f"0x{self.r:02X}{self.g:02X}{self.b:02X}"


NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
}

DEFAULT_FONT_SIZE = 24


@dataclass(frozen=True)
class TextStyle:
    """Font settings for drawtext."""

    font_size: int | None = None
    font_file: str | None = None
    color: TextColor = field(default_factory=TextColor)

    @property
    def effective_font_size(self) -> int:
        return self.font_size or DEFAULT_FONT_SIZE


class TextAnimation(Enum):
    FADE_IN = "fade-in"
    SLIDE_IN = "slide-in"
    TYPEWRITER = "typewriter"

    @classmethod
    def parse(cls, raw: str) -> TextAnimation:
        return lookup_alias(
            raw,
            {
                "fade-in": cls.FADE_IN,
                "fadein": cls.FADE_IN,
                "fade": cls.FADE_IN,
                "slide-in": cls.SLIDE_IN,
                "slidein": cls.SLIDE_IN,
                "slide": cls.SLIDE_IN,
                "typewriter": cls.TYPEWRITER,
                "type": cls.TYPEWRITER,
            },
            "text animation",
            "fade-in, slide-in, or typewriter",
        )
