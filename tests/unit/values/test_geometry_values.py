"""Unit tests for speed, rotation, resolution, region and grid parsers."""

import pytest

from ffrecipe.exceptions import ParseError
from ffrecipe.values import (
    BlurRegion,
    BlurType,
    FlipDirection,
    GridLayout,
    ResizeTarget,
    RotateDegrees,
    SpeedFactor,
    SplitScreenOrientation,
)


class TestSpeedFactor:
    """Tests for SpeedFactor.parse()."""

    @pytest.mark.parametrize("raw,expected", [("2x", 2.0), ("0.5x", 0.5), ("10X", 10.0)])
    def test_valid(self, raw, expected):
        assert SpeedFactor.parse(raw).factor == expected

    @pytest.mark.parametrize("raw", ["2", "x2", "fast", "0x"])
    def test_invalid(self, raw):
        """The x suffix is required and the factor must be positive."""
        with pytest.raises(ParseError):
            SpeedFactor.parse(raw)

    def test_str(self):
        assert str(SpeedFactor(2.0)) == "2x"
        assert str(SpeedFactor(1.5)) == "1.5x"


class TestRotateDegrees:
    """Tests for RotateDegrees."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("90", 90), ("180", 180), ("270deg", 270), ("-90", 270), ("450", 90), ("360", 0)],
    )
    def test_normalized_modulo_360(self, raw, expected):
        """Angles are reduced modulo 360."""
        assert RotateDegrees.parse(raw).degrees == expected

    @pytest.mark.parametrize("raw", ["45", "quarter", "91"])
    def test_non_right_angles_rejected(self, raw):
        """Only multiples of 90 are supported."""
        with pytest.raises(ParseError):
            RotateDegrees.parse(raw)

    def test_unsupported_angle_message_kept(self):
        with pytest.raises(ParseError, match="Unsupported rotation: 45"):
            RotateDegrees.parse("45deg")

    def test_non_numeric_message(self):
        with pytest.raises(ParseError, match="Invalid rotation: quarter"):
            RotateDegrees.parse("quarter")


class TestResizeTarget:
    """Tests for ResizeTarget.parse()."""

    def test_preset(self):
        """Named presets carry their label."""
        target = ResizeTarget.parse("720p")
        assert (target.width, target.height) == (1280, 720)
        assert str(target) == "720p"

    def test_4k_alias(self):
        """4k and 2160p are the same frame size."""
        assert ResizeTarget.parse("4K") == ResizeTarget.parse("2160p")

    def test_dimensions(self):
        """WxH gives explicit dimensions."""
        target = ResizeTarget.parse("640x360")
        assert target == ResizeTarget(640, 360)
        assert target.to_ffmpeg_scale() == "scale=640:360"
        assert str(target) == "640x360"

    def test_unknown_preset(self):
        """An unknown p-preset gets a preset-specific error."""
        with pytest.raises(ParseError, match="Unknown preset"):
            ResizeTarget.parse("900p")

    def test_garbage(self):
        with pytest.raises(ParseError):
            ResizeTarget.parse("big")


class TestBlurValues:
    """Tests for BlurRegion and BlurType."""

    def test_region(self):
        region = BlurRegion.parse("10, 20, 300, 200")
        assert region == BlurRegion(10, 20, 300, 200)
        assert str(region) == "10,20,300,200"

    def test_zero_size_region_rejected(self):
        """A region must have a width and a height."""
        with pytest.raises(ParseError):
            BlurRegion.parse("0,0,0,100")

    def test_full_frame(self):
        """Keywords select a whole-frame blur."""
        assert BlurType.parse("full").region is None

    def test_region_blur(self):
        assert BlurType.parse("1,2,3,4").region == BlurRegion(1, 2, 3, 4)


class TestGridLayout:
    """Tests for GridLayout.parse()."""

    def test_valid(self):
        layout = GridLayout.parse("3x2")
        assert (layout.cols, layout.rows) == (3, 2)
        assert layout.total_cells == 6
        assert str(layout) == "3x2"

    @pytest.mark.parametrize("raw", ["0x2", "2x0", "2by2", "2"])
    def test_invalid(self, raw):
        with pytest.raises(ParseError):
            GridLayout.parse(raw)


class TestDirections:
    """Tests for keyword direction parsers."""

    def test_flip_aliases(self):
        assert FlipDirection.parse("h") is FlipDirection.HORIZONTAL
        assert FlipDirection.parse("Vertical") is FlipDirection.VERTICAL

    def test_split_screen_aliases(self):
        assert SplitScreenOrientation.parse("side-by-side") is SplitScreenOrientation.HORIZONTAL
        assert SplitScreenOrientation.parse("top-bottom") is SplitScreenOrientation.VERTICAL

    def test_unknown_keyword(self):
        with pytest.raises(ParseError, match="flip direction"):
            FlipDirection.parse("diagonal")
