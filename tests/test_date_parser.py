"""Tests for date parsing and calendar month helpers."""

import pytest
from datetime import date, datetime, timedelta, timezone

from finsight.utils.date_parser import (
    add_months,
    full_month_name,
    in_month,
    month_bounds,
    month_key,
    months_between,
    parse_date,
    resolve_reference,
    short_month_label,
    start_of_month,
    to_datetime,
)

TODAY = date(2024, 6, 15)  # a Saturday


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_today_defaults_to_current_date():
    """Test parsing 'today' without an anchor."""
    assert parse_date("today") == date.today()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("today", date(2024, 6, 15)),
        ("Yesterday", date(2024, 6, 14)),
        ("tomorrow", date(2024, 6, 16)),
        ("last month", date(2024, 5, 1)),
        ("this month", date(2024, 6, 1)),
        ("next month", date(2024, 7, 1)),
        ("last year", date(2023, 1, 1)),
        ("this year", date(2024, 1, 1)),
        ("next year", date(2025, 1, 1)),
        ("last week", date(2024, 6, 3)),
        ("this week", date(2024, 6, 10)),
        ("next week", date(2024, 6, 17)),
    ],
)
def test_parse_relative_dates(text, expected):
    """Test relative dates against a fixed anchor."""
    assert parse_date(text, today=TODAY) == expected


def test_parse_last_month_in_january():
    """Test that 'last month' crosses the year boundary."""
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_invalid_relative():
    """Test parsing invalid relative date."""
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


class TestToDatetime:
    """Tests for timestamp normalization."""

    def test_iso_string(self):
        assert to_datetime("2024-06-10T08:30:00") == datetime(2024, 6, 10, 8, 30)

    def test_plain_date_is_midnight(self):
        assert to_datetime(date(2024, 6, 10)) == datetime(2024, 6, 10)
        assert to_datetime("2024-06-10") == datetime(2024, 6, 10)

    def test_aware_datetime_becomes_naive_local(self):
        aware = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)

        result = to_datetime(aware)

        assert result.tzinfo is None
        assert result == aware.astimezone().replace(tzinfo=None)

    def test_naive_datetime_is_unchanged(self):
        value = datetime(2024, 6, 10, 12, 0)

        assert to_datetime(value) is value

    @pytest.mark.parametrize("value", ["", "   ", "garbage", 12345, None])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            to_datetime(value)


def test_resolve_reference_defaults_to_now():
    before = datetime.now()
    resolved = resolve_reference()
    after = datetime.now()

    assert before - timedelta(seconds=1) <= resolved <= after


def test_resolve_reference_parses_value():
    assert resolve_reference("2024-06-15") == datetime(2024, 6, 15)


class TestMonthHelpers:
    """Tests for calendar month arithmetic."""

    def test_start_of_month(self):
        assert start_of_month(datetime(2024, 6, 15, 12, 30)) == datetime(2024, 6, 1)

    def test_add_months_clamps_day(self):
        assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
        assert add_months(datetime(2024, 3, 31), -1) == datetime(2024, 2, 29)

    def test_month_bounds_are_half_open(self):
        start, end = month_bounds(datetime(2024, 6, 15))

        assert (start, end) == (datetime(2024, 6, 1), datetime(2024, 7, 1))
        assert in_month(datetime(2024, 6, 1), (start, end))
        assert in_month(datetime(2024, 6, 30, 23, 59, 59), (start, end))
        assert not in_month(datetime(2024, 7, 1), (start, end))

    def test_month_bounds_offset_crosses_years(self):
        assert month_bounds(datetime(2024, 2, 10), -3) == (datetime(2023, 11, 1), datetime(2023, 12, 1))
        assert month_bounds(datetime(2024, 12, 10), 1) == (datetime(2025, 1, 1), datetime(2025, 2, 1))

    def test_labels(self):
        value = datetime(2024, 3, 5)

        assert month_key(value) == "2024-03"
        assert short_month_label(value) == "mar 24"
        assert full_month_name(value) == "março"
        assert short_month_label(datetime(2009, 12, 1)) == "dez 09"

    def test_months_between_truncates(self):
        start = datetime(2024, 6, 15, 12, 0)

        assert months_between(datetime(2024, 12, 20), start) == 6
        assert months_between(datetime(2025, 8, 15, 11, 0), start) == 13
        assert months_between(datetime(2024, 7, 14), start) == 0
        assert months_between(datetime(2024, 3, 1), start) == -3
