"""Tests for the parsing and id helpers."""

from datetime import date, datetime, timedelta, timezone, UTC
from decimal import Decimal

import pytest

from khata.utils.amount_parser import parse_amount, to_decimal
from khata.utils.date_parser import (
    end_of_day,
    get_date_range,
    normalize_timestamp,
    parse_date,
    start_of_day,
)
from khata.utils.ids import generate_id, get_initials


class TestInitials:
    """Tests for initials derivation."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("john smith", "JS"),
            ("madonna", "M"),
            ("Mary Ann Lee", "MA"),
            ("  ali   raza ", "AR"),
            ("", ""),
        ],
    )
    def test_get_initials(self, name, expected):
        assert get_initials(name) == expected


def test_generate_id_unique():
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000


class TestParseAmount:
    """Tests for amount parsing."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("500", Decimal("500")),
            ("1,250.50", Decimal("1250.50")),
            ("Rs 500", Decimal("500")),
            ("rs.75", Decimal("75")),
            ("PKR 1,000", Decimal("1000")),
            ("₹99.90", Decimal("99.90")),
            ("$12.30", Decimal("12.30")),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "-5", "NaN", "Infinity"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_amount(text)


def test_to_decimal():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(Decimal("2")) == Decimal("2")
    with pytest.raises(ValueError):
        to_decimal("ten")


@pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), "-Infinity"])
def test_to_decimal_rejects_non_finite(value):
    with pytest.raises(ValueError, match="finite"):
        to_decimal(value)


class TestParseDate:
    """Tests for date parsing."""

    def test_absolute(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)
        assert parse_date("15 Jan 2024") == date(2024, 1, 15)

    def test_relative(self):
        today = date.today()
        assert parse_date("today") == today
        assert parse_date("Yesterday") == today - timedelta(days=1)
        assert parse_date("this month") == today.replace(day=1)
        assert parse_date("this week").weekday() == 0

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestDateRange:
    """Tests for named periods."""

    def test_today(self):
        today = date.today()
        assert get_date_range("today") == (today, today)

    def test_last_month(self):
        start, end = get_date_range("last-month")
        assert start.day == 1
        assert end == date.today().replace(day=1) - timedelta(days=1)
        assert start.month == end.month

    def test_last_week_is_seven_days(self):
        start, end = get_date_range("last-week")
        assert start.weekday() == 0
        assert end - start == timedelta(days=6)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("fortnight")


def test_day_bounds():
    day = date(2024, 2, 29)
    assert start_of_day(day) == datetime(2024, 2, 29, tzinfo=UTC)
    assert end_of_day(day) > datetime(2024, 2, 29, 23, 59, 59, tzinfo=UTC)
    assert end_of_day(day) < datetime(2024, 3, 1, tzinfo=UTC)


def test_normalize_timestamp():
    karachi = timezone(timedelta(hours=5))
    value = datetime(2024, 1, 1, 5, 0, 0, 123456, tzinfo=karachi)

    normalized = normalize_timestamp(value)
    assert normalized == datetime(2024, 1, 1, 0, 0, 0, 123000, tzinfo=UTC)
    assert normalize_timestamp(datetime(2024, 1, 1)).tzinfo is UTC
