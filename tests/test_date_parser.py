"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from budgetkeeper.utils.date_parser import parse_date, get_date_range

# A Wednesday
TODAY = date(2024, 3, 13)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("Today", today=TODAY) == TODAY


def test_parse_yesterday_and_tomorrow():
    """Test parsing 'yesterday' and 'tomorrow'."""
    assert parse_date("yesterday", today=TODAY) == date(2024, 3, 12)
    assert parse_date("tomorrow", today=TODAY) == date(2024, 3, 14)


def test_parse_last_month():
    """Test parsing 'last month' gives the first day of last month."""
    assert parse_date("last month", today=TODAY) == date(2024, 2, 1)
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


def test_parse_weeks():
    """Test that week expressions give Mondays."""
    assert parse_date("this week", today=TODAY) == date(2024, 3, 11)
    assert parse_date("last week", today=TODAY) == date(2024, 3, 4)
    assert parse_date("next week", today=TODAY) == date(2024, 3, 18)
    assert parse_date("last week", today=TODAY).weekday() == 0


def test_parse_years():
    """Test parsing year expressions."""
    assert parse_date("this year", today=TODAY) == date(2024, 1, 1)
    assert parse_date("last year", today=TODAY) == date(2023, 1, 1)
    assert parse_date("next year", today=TODAY) == date(2025, 1, 1)


def test_parse_next_month_from_month_end():
    """Test that month expressions are not affected by the day of month."""
    assert parse_date("next month", today=date(2024, 1, 31)) == date(2024, 2, 1)


def test_parse_last_weekday():
    """Test parsing 'last <weekday>'."""
    assert parse_date("last monday", today=TODAY) == date(2024, 3, 11)
    assert parse_date("last friday", today=TODAY) == date(2024, 3, 8)
    # The same weekday means one week back
    assert parse_date("last wednesday", today=TODAY) == date(2024, 3, 6)


def test_parse_invalid_relative():
    """Test parsing invalid relative date."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("last invalid")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    # These should all work via dateutil parser
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_get_date_range_this_month():
    """Test get_date_range for this-month."""
    start, end = get_date_range("this-month", today=TODAY)
    assert start == date(2024, 3, 1)
    assert end == TODAY


def test_get_date_range_this_year():
    """Test get_date_range for this-year."""
    start, end = get_date_range("this-year", today=TODAY)
    assert start == date(2024, 1, 1)
    assert end == TODAY


def test_get_date_range_this_week():
    """Test get_date_range for this-week."""
    start, end = get_date_range("this-week", today=TODAY)
    assert start == date(2024, 3, 11)
    assert start.weekday() == 0  # Should be Monday
    assert end == TODAY


def test_get_date_range_last_month():
    """Test get_date_range for last-month covers the whole month."""
    start, end = get_date_range("last-month", today=TODAY)
    assert start == date(2024, 2, 1)
    assert end == date(2024, 2, 29)


def test_get_date_range_last_month_in_january():
    """Test last-month across a year boundary."""
    start, end = get_date_range("last-month", today=date(2024, 1, 10))
    assert start == date(2023, 12, 1)
    assert end == date(2023, 12, 31)


def test_get_date_range_last_year():
    """Test get_date_range for last-year."""
    start, end = get_date_range("last-year", today=TODAY)
    assert start == date(2023, 1, 1)
    assert end == date(2023, 12, 31)


def test_get_date_range_last_week():
    """Test get_date_range for last-week."""
    start, end = get_date_range("last-week", today=TODAY)
    assert start == date(2024, 3, 4)
    assert end == date(2024, 3, 10)
    assert start.weekday() == 0  # Monday
    assert end.weekday() == 6  # Sunday
    assert (end - start) == timedelta(days=6)


def test_get_date_range_first_day_of_month():
    """Test this-month on the first day is a single day."""
    first = date(2024, 3, 1)
    assert get_date_range("this-month", today=first) == (first, first)


def test_get_date_range_invalid_period():
    """Test get_date_range with invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")
