"""Unit tests for size, bitrate and compression target parsers."""

import pytest

from ffrecipe.exceptions import ParseError
from ffrecipe.values import CompressTarget, QualityPreset, TargetBitrate, TargetSize


class TestTargetSize:
    """Tests for TargetSize.parse()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("10mb", 10 * 1024**2),
            ("10MB", 10 * 1024**2),
            ("800k", 800 * 1024),
            ("1.5gb", int(1.5 * 1024**3)),
            ("512b", 512),
            (" 2 m ", 2 * 1024**2),
        ],
    )
    def test_binary_units(self, raw, expected):
        """Sizes use 1024-based multipliers."""
        assert TargetSize.parse(raw).bytes == expected

    @pytest.mark.parametrize("raw", ["10", "mb", "10tb", "ten mb"])
    def test_invalid(self, raw):
        """A number and a known unit are both required."""
        with pytest.raises(ParseError):
            TargetSize.parse(raw)

    def test_str(self):
        """Sizes print in the largest fitting unit."""
        assert str(TargetSize(10 * 1024**2)) == "10.00 MB"
        assert str(TargetSize(100)) == "100 B"


class TestTargetBitrate:
    """Tests for TargetBitrate.parse()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("800kbps", 800_000),
            ("2M", 2_000_000),
            ("1500k", 1_500_000),
            ("128000", 128_000),
            ("2.5mbps", 2_500_000),
        ],
    )
    def test_decimal_units(self, raw, expected):
        """Bitrates use 1000-based multipliers like ffmpeg."""
        assert TargetBitrate.parse(raw).bits_per_second == expected

    def test_zero_rejected(self):
        """A zero rate is not a target."""
        with pytest.raises(ParseError, match="greater than 0"):
            TargetBitrate.parse("0k")

    def test_to_ffmpeg(self):
        """ffmpeg form is whole kilobits."""
        assert TargetBitrate(800_000).to_ffmpeg() == "800k"


class TestCompressTarget:
    """Tests for CompressTarget.parse()."""

    def test_size(self):
        """A bare size is a size target."""
        target = CompressTarget.parse("10mb")
        assert target.size == TargetSize(10485760)
        assert target.bitrate is None
        assert target.quality is None

    def test_bitrate(self):
        """A value ending in bps is a bitrate target."""
        target = CompressTarget.parse("800kbps")
        assert target.bitrate == TargetBitrate(800_000)

    def test_quality(self):
        """<preset>-quality selects a quality preset."""
        target = CompressTarget.parse("high-quality")
        assert target.quality is QualityPreset.HIGH

    def test_unknown_quality(self):
        """An unknown preset name is rejected."""
        with pytest.raises(ParseError):
            CompressTarget.parse("amazing-quality")

    def test_exactly_one_target(self):
        """Constructing with zero or two targets fails."""
        with pytest.raises(ParseError):
            CompressTarget()
        with pytest.raises(ParseError):
            CompressTarget(size=TargetSize(1), quality=QualityPreset.LOW)
