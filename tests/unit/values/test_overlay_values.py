"""Unit tests for overlay placement, sizing, opacity and text parsers."""

import pytest

from ffrecipe.exceptions import ParseError
from ffrecipe.values import (
    Anchor,
    Opacity,
    PipPosition,
    TextAnimation,
    TextColor,
    TextPosition,
    TextStyle,
    WatermarkPosition,
    WatermarkSize,
)


class TestOpacity:
    """Tests for Opacity.parse()."""

    @pytest.mark.parametrize("raw,expected", [("0.5", 0.5), ("50%", 0.5), ("1", 1.0), ("0", 0.0)])
    def test_valid(self, raw, expected):
        assert Opacity.parse(raw).value == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["1.5", "150%", "-0.1", "half"])
    def test_out_of_range_or_garbage(self, raw):
        with pytest.raises(ParseError):
            Opacity.parse(raw)

    def test_is_opaque(self):
        assert Opacity(1.0).is_opaque
        assert not Opacity(0.99).is_opaque


class TestWatermarkPosition:
    """Tests for WatermarkPosition."""

    def test_default_is_bottom_right(self):
        assert WatermarkPosition().to_overlay() == "W-w-10:H-h-10"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("top-left", "10:10"),
            ("topright", "W-w-10:10"),
            ("bottom-left", "10:H-h-10"),
            ("Bottom-Right", "W-w-10:H-h-10"),
        ],
    )
    def test_corners(self, raw, expected):
        assert WatermarkPosition.parse(raw).to_overlay() == expected

    def test_coordinates(self):
        position = WatermarkPosition.parse("100, 50")
        assert position.anchor is None
        assert position.to_overlay() == "100:50"

    def test_center_is_not_a_watermark_corner(self):
        """Watermarks accept corners and coordinates only."""
        with pytest.raises(ParseError):
            WatermarkPosition.parse("center")


class TestTextPosition:
    """Tests for TextPosition."""

    def test_default_bottom_center(self):
        assert TextPosition().to_drawtext() == ("(W-tw)/2", "H-th-10")

    def test_edge_alias(self):
        assert TextPosition.parse("top").anchor is Anchor.TOP_CENTER

    def test_coordinates(self):
        assert TextPosition.parse("5,6").to_drawtext() == ("5", "6")


class TestPipPosition:
    """Tests for PipPosition."""

    def test_center(self):
        assert PipPosition.parse("centre") is PipPosition.CENTER
        assert PipPosition.CENTER.to_overlay() == "(W-w)/2:(H-h)/2"


class TestWatermarkSize:
    """Tests for WatermarkSize.parse()."""

    def test_decimal_fraction(self):
        """A decimal in [0, 1] is a fraction of the main width."""
        size = WatermarkSize.parse("0.2")
        assert size.is_fraction
        assert size.fraction == pytest.approx(0.2)

    def test_percentage(self):
        assert WatermarkSize.parse("20%").fraction == pytest.approx(0.2)

    def test_bare_integer_is_pixels(self):
        """A bare integer, even 1, is a pixel width."""
        assert WatermarkSize.parse("200") == WatermarkSize(width=200)
        assert WatermarkSize.parse("1") == WatermarkSize(width=1)

    def test_width_and_height(self):
        assert WatermarkSize.parse("200x100") == WatermarkSize(width=200, height=100)

    @pytest.mark.parametrize("raw", ["big", "150%", "x100"])
    def test_invalid(self, raw):
        with pytest.raises(ParseError):
            WatermarkSize.parse(raw)

    @pytest.mark.parametrize(
        "raw",
        ["-5", "-0.5", "inf", "nan", "1e9999", "0", "200x0", "nan%", "inf%", "9" * 400 + ".5"],
    )
    def test_out_of_range_numbers_rejected(self, raw):
        """Negative, zero and non-finite sizes fail with a parse error."""
        with pytest.raises(ParseError):
            WatermarkSize.parse(raw)

    def test_large_integer_width_kept_exact(self):
        assert WatermarkSize.parse("9" * 30) == WatermarkSize(width=int("9" * 30))


class TestTextStyling:
    """Tests for TextColor, TextStyle and TextAnimation."""

    def test_named_color(self):
        assert TextColor.parse("Yellow").to_ffmpeg() == "0xFFFF00"

    def test_hex_color(self):
        assert TextColor.parse("#1a2b3c") == TextColor(0x1A, 0x2B, 0x3C)

    def test_invalid_color(self):
        with pytest.raises(ParseError, match="Invalid color"):
            TextColor.parse("sparkly")

    def test_default_font_size(self):
        assert TextStyle().effective_font_size == 24
        assert TextStyle(font_size=48).effective_font_size == 48

    def test_animation_aliases(self):
        assert TextAnimation.parse("slide") is TextAnimation.SLIDE_IN
        assert TextAnimation.parse("type") is TextAnimation.TYPEWRITER
