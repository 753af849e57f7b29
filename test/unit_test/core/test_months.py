"""Unit tests for month label helpers."""

import datetime as dt

import pytest

from trackprofit.core.errors import InvalidMonthLabel
from trackprofit.core.months import month_bounds, month_label, parse_month_label, previous_month_label


class TestMonthLabels:
    """Test month label formatting and parsing."""

    def test_month_label(self):
        assert month_label(dt.date(2026, 3, 15)) == "2026-03"

    @pytest.mark.parametrize(
        "today, expected",
        [
            (dt.date(2026, 3, 1), "2026-02"),
            (dt.date(2026, 1, 31), "2025-12"),
            (dt.date(2026, 12, 5), "2026-11"),
        ],
    )
    def test_previous_month_label(self, today, expected):
        assert previous_month_label(today) == expected

    def test_parse(self):
        assert parse_month_label("2026-07") == (2026, 7)

    @pytest.mark.parametrize("label", ["2026-13", "2026-00", "2026-7", "26-07", "2026/07", "", "abcd-ef"])
    def test_invalid_labels(self, label):
        with pytest.raises(InvalidMonthLabel) as exc_info:
            month_bounds(label)
        assert exc_info.value.label == label

    def test_invalid_label_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_month_label("nope")


class TestMonthBounds:
    """Test first and last day of a month."""

    def test_regular_month(self):
        assert month_bounds("2026-04") == (dt.date(2026, 4, 1), dt.date(2026, 4, 30))

    def test_leap_february(self):
        assert month_bounds("2024-02") == (dt.date(2024, 2, 1), dt.date(2024, 2, 29))

    def test_december(self):
        assert month_bounds("2025-12") == (dt.date(2025, 12, 1), dt.date(2025, 12, 31))
