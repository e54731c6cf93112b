"""Unit tests for time, duration, split and condition parsers."""

import pytest

from ffrecipe.exceptions import ParseError
from ffrecipe.values import (
    ComparisonOperator,
    Duration,
    ProcessingCondition,
    SplitMode,
    Time,
)


class TestTimeParse:
    """Tests for Time.parse()."""

    def test_seconds_only(self):
        """A bare number is seconds and is not folded into minutes."""
        assert Time.parse("90") == Time(0, 0, 90)

    def test_minutes_seconds(self):
        """M:SS fills minutes and seconds."""
        assert Time.parse("1:30") == Time(0, 1, 30)

    def test_hours_minutes_seconds(self):
        """H:MM:SS fills all three components."""
        assert Time.parse("1:05:30") == Time(1, 5, 30)

    def test_surrounding_whitespace(self):
        """Leading and trailing spaces are ignored."""
        assert Time.parse("  0:45 ") == Time(0, 0, 45)

    @pytest.mark.parametrize("raw", ["", "abc", "1:2:3:4", "1:30.5", "-5"])
    def test_invalid_shapes(self, raw):
        """Anything but SS, M:SS or H:MM:SS is rejected."""
        with pytest.raises(ParseError):
            Time.parse(raw)

    def test_error_carries_hint(self):
        """The error message suggests the accepted shapes."""
        with pytest.raises(ParseError) as exc_info:
            Time.parse("soon")
        assert exc_info.value.raw == "soon"
        assert "try 30, 1:30 or 1:05:30" in str(exc_info.value)

    def test_to_ffmpeg_is_zero_padded(self):
        """ffmpeg form is always HH:MM:SS."""
        assert Time.parse("1:30").to_ffmpeg() == "00:01:30"
        assert Time.parse("5").to_ffmpeg() == "00:00:05"

    def test_to_seconds(self):
        """Components are summed into seconds."""
        assert Time(1, 2, 3).to_seconds() == 3723

    def test_str_round_trips_shape(self):
        """str() drops leading zero components."""
        assert str(Time(0, 0, 7)) == "7"
        assert str(Time(0, 1, 5)) == "1:05"
        assert str(Time(2, 0, 9)) == "2:00:09"


class TestDurationParse:
    """Tests for Duration.parse()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("2", 2.0), ("2s", 2.0), ("1.5s", 1.5), ("3S", 3.0), ("0", 0.0)],
    )
    def test_valid(self, raw, expected):
        """Plain and s-suffixed seconds are accepted."""
        assert Duration.parse(raw).seconds == expected

    @pytest.mark.parametrize("raw", ["", "s", "two", "1m", "-1s"])
    def test_invalid(self, raw):
        """Other units and negative values are rejected."""
        with pytest.raises(ParseError):
            Duration.parse(raw)

    def test_negative_constructor_rejected(self):
        """A negative span cannot be constructed directly either."""
        with pytest.raises(ParseError):
            Duration(-1.0)

    def test_str(self):
        """Integral durations print without a decimal point."""
        assert str(Duration(2.0)) == "2s"
        assert str(Duration(1.5)) == "1.5s"


class TestSplitModeParse:
    """Tests for SplitMode.parse()."""

    def test_every(self):
        """'every 30s' sets a segment length."""
        mode = SplitMode.parse("every 30s")
        assert mode.every == Duration(30.0)
        assert mode.parts is None

    @pytest.mark.parametrize("raw", ["into 3 parts", "3 parts", "3", "into 3"])
    def test_parts(self, raw):
        """Part counts are accepted with or without noise words."""
        mode = SplitMode.parse(raw)
        assert mode.parts == 3
        assert mode.every is None

    def test_single_part_rejected(self):
        """Splitting into one part is meaningless."""
        with pytest.raises(ParseError, match="at least 2"):
            SplitMode.parse("into 1 part")

    def test_garbage_rejected(self):
        """Unknown shapes are rejected."""
        with pytest.raises(ParseError):
            SplitMode.parse("in half")


class TestProcessingCondition:
    """Tests for ProcessingCondition."""

    def test_parse(self):
        """A duration comparison is parsed into operator and threshold."""
        condition = ProcessingCondition.parse("duration < 30s")
        assert condition.operator is ComparisonOperator.LESS_THAN
        assert condition.threshold == Duration(30.0)

    def test_parse_rejects_other_properties(self):
        """Only duration conditions are supported."""
        with pytest.raises(ParseError):
            ProcessingCondition.parse("width > 100")

    def test_matches(self):
        """Comparisons evaluate against a probed duration."""
        assert ProcessingCondition.parse("duration < 30s").matches(10.0)
        assert not ProcessingCondition.parse("duration > 30s").matches(10.0)

    def test_equals_uses_tolerance(self):
        """Equality allows a tenth of a second of slack."""
        condition = ProcessingCondition.parse("duration = 10")
        assert condition.matches(10.05)
        assert not condition.matches(10.2)
