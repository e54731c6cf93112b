"""Colour adjustments, presets and colour-space targets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ffrecipe.exceptions import ParseError
from ffrecipe.values._common import lookup_alias, normalize, parse_hex_color

ADJUSTMENT_RANGE = (-1.0, 1.0)


def _check_adjustment(name: str, value: float | None) -> None:
    low, high = ADJUSTMENT_RANGE
    if value is not None and not low <= value <= high:
        raise ParseError(
            f"{name.capitalize()} must be between {low} and {high}", raw=str(value)
        )


@dataclass(frozen=True)
class FilterAdjustments:
    """Brightness, contrast and saturation offsets, each in ``[-1, 1]``.

    Zero means unchanged; unset components are left out of the eq filter.
    """

    brightness: float | None = None
    contrast: float | None = None
    saturation: float | None = None

    def __post_init__(self) -> None:
        _check_adjustment("brightness", self.brightness)
        _check_adjustment("contrast", self.contrast)
        _check_adjustment("saturation", self.saturation)

    @classmethod
    def parse(cls, raw: str) -> FilterAdjustments:
        """Parse ``brightness=0.1,contrast=-0.2`` style assignments."""
        values: dict[str, float] = {}
        for item in filter(None, (part.strip() for part in raw.split(","))):
            key, sep, value = item.partition("=")
            key = key.strip().lower()
            if not sep or key not in ("brightness", "contrast", "saturation"):
                raise ParseError(
                    f"Invalid adjustment: {item}",
                    raw=raw,
                    hint="brightness=0.1,contrast=0.2,saturation=-0.1",
                )
            try:
                values[key] = float(value)
            except ValueError:
                raise ParseError(f"Invalid {key} value: {value}", raw=raw) from None
        return cls(**values)

    @property
    def is_empty(self) -> bool:
        return self.brightness is None and self.contrast is None and self.saturation is None

    def to_eq(self) -> str | None:
        """Render an ``eq`` filter, or None if nothing is set."""
        parts = []
        if self.brightness is not None:
            parts.append(f"brightness={self.brightness:.3f}")
        if self.contrast is not None:
            parts.append(f"contrast={self.contrast + 1.0:.3f}")
        if self.saturation is not None:
            parts.append(f"saturation={self.saturation + 1.0:.3f}")
        if not parts:
            return None
        return "eq=" + ":".join(parts)


class ColorPreset(Enum):
    VINTAGE = "vintage"
    BLACK_AND_WHITE = "black-and-white"
    SEPIA = "sepia"

    @classmethod
    def parse(cls, raw: str) -> ColorPreset:
        return lookup_alias(
            raw,
            {
                "vintage": cls.VINTAGE,
                "black-and-white": cls.BLACK_AND_WHITE,
                "blackandwhite": cls.BLACK_AND_WHITE,
                "bw": cls.BLACK_AND_WHITE,
                "grayscale": cls.BLACK_AND_WHITE,
                "sepia": cls.SEPIA,
            },
            "color preset",
            "vintage, black-and-white, or sepia",
        )

    def filters(self) -> list[str]:
        return list(_PRESET_FILTERS[self])

    def __str__(self) -> str:
        return self.value


_PRESET_FILTERS = {
    ColorPreset.VINTAGE: (
        "eq=brightness=0.05:contrast=1.15:saturation=0.85",
        "colorbalance=rs=0.1:gs=-0.05:bs=-0.1",
    ),
    ColorPreset.BLACK_AND_WHITE: ("format=gray",),
    ColorPreset.SEPIA: (
        "colorchannelmixer=.393:.769:.189:0:.349:.686:.168:0:.272:.534:.131",
    ),
}


class ColorGradePreset(Enum):
    CINEMATIC = "cinematic"
    WARM = "warm"
    COOL = "cool"
    DRAMATIC = "dramatic"

    @classmethod
    def parse(cls, raw: str) -> ColorGradePreset:
        return lookup_alias(
            raw,
            {member.value: member for member in cls},
            "color grade preset",
            "cinematic, warm, cool, or dramatic",
        )


@dataclass(frozen=True)
class ChromaKeyColor:
    """Key colour removed by the chromakey filter."""

    r: int
    g: int
    b: int

    @classmethod
    def parse(cls, raw: str) -> ChromaKeyColor:
        text = normalize(raw)
        if text == "green":
            return cls(0x00, 0xFF, 0x00)
        if text == "blue":
            return cls(0x00, 0x00, 0xFF)
        rgb = parse_hex_color(text)
        if rgb is None:
            raise ParseError(
                f"Invalid chroma key color: {raw}",
                raw=raw,
                hint="green, blue, or hex like '#00FF00'",
            )
        return cls(*rgb)

    def to_ffmpeg(self) -> str:
        return f"0x{self.r:02X}{self.g:02X}{self.b:02X}"


class Colorspace(Enum):
    """Target colour space. Values are ffmpeg colorspace names."""

    REC709 = "rec709"
    REC2020 = "rec2020"
    P3 = "p3"
    SRGB = "srgb"

    @classmethod
    def parse(cls, raw: str) -> Colorspace:
        return lookup_alias(
            raw,
            {
                "rec709": cls.REC709,
                "rec-709": cls.REC709,
                "bt709": cls.REC709,
                "bt-709": cls.REC709,
                "rec2020": cls.REC2020,
                "rec-2020": cls.REC2020,
                "bt2020": cls.REC2020,
                "bt-2020": cls.REC2020,
                "p3": cls.P3,
                "dci-p3": cls.P3,
                "srgb": cls.SRGB,
                "s-rgb": cls.SRGB,
            },
            "color space",
            "rec709, rec2020, p3, or srgb",
        )

    def to_ffmpeg(self) -> str:
        return _COLORSPACE_NAMES[self]


_COLORSPACE_NAMES = {
    Colorspace.REC709: "bt709",
    Colorspace.REC2020: "bt2020",
    Colorspace.P3: "smpte170m",
    Colorspace.SRGB: "bt709",
}
