"""Tests for logstamp.core.relative."""

import pytest

from logstamp.core.composite import CompositeTime
from logstamp.core.relative import RIGHT_NOW, Direction, format_relative, relative_text


class TestFormatRelative:
    """Tests for format_relative()."""

    def test_no_separators(self):
        ct = CompositeTime(years=1, days=2, hours=4)
        assert format_relative(ct, Direction.AGO) == "1y2d4h ago"

    def test_all_units(self):
        ct = CompositeTime(1, 2, 3, 4, 5)
        assert format_relative(ct, Direction.FROM_NOW) == "1y2d3h4m5s from now"

    def test_zero_units_skipped(self):
        ct = CompositeTime(hours=1, seconds=7)
        assert format_relative(ct, Direction.AGO) == "1h7s ago"

    def test_no_leading_zeros(self):
        assert format_relative(CompositeTime(minutes=5), Direction.AGO) == "5m ago"

    def test_all_zero_is_direction_only(self):
        assert format_relative(CompositeTime(), Direction.AGO) == " ago"

    def test_plain_string_direction(self):
        assert format_relative(CompositeTime(seconds=3), " later") == "3s later"

    def test_direction_text(self):
        assert Direction.AGO.value == " ago"
        assert len(Direction.AGO.value) == 4
        assert Direction.FROM_NOW.value == " from now"
        assert len(Direction.FROM_NOW.value) == 9

    @pytest.mark.parametrize(
        "diff, expected",
        [(1, Direction.AGO), (0, Direction.AGO), (-1, Direction.FROM_NOW)],
    )
    def test_direction_for_difference(self, diff, expected):
        assert Direction.for_difference(diff) is expected


class TestRelativeText:
    """Tests for relative_text()."""

    def test_right_now(self):
        assert relative_text(0, 2) == RIGHT_NOW == "right now"

    def test_past(self):
        assert relative_text(900, 2) == "15m ago"

    def test_future(self):
        assert relative_text(-900, 2) == "15m from now"

    def test_rounds_to_precision(self):
        # 1h 59m 30s
        assert relative_text(7170, 2) == "2h ago"
        assert relative_text(7170, 3) == "1h59m30s ago"

    def test_years(self):
        # 1y 364d 23h 59m 59s rolls over to 2 years.
        seconds = 2 * 365 * 86400 - 1
        assert relative_text(seconds, 2) == "2y ago"

    def test_precision_zero(self):
        assert relative_text(95310, 0) == " ago"
