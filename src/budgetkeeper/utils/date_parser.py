"""Date parsing utilities for command-line input."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
PERIODS = ("this-month", "last-month", "this-year", "last-year", "this-week", "last-week")


def _period_start(period: str, offset: int, today: date) -> Optional[date]:
    """First day of the week/month/year ``offset`` periods away from today."""
    if period == "week":
        return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    if period == "month":
        return today.replace(day=1) + relativedelta(months=offset)
    if period == "year":
        return today.replace(month=1, day=1) + relativedelta(years=offset)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - "today", "yesterday", "tomorrow"
    - "this/last/next week|month|year" (first day of that period)
    - "last <weekday>" (most recent such day before today)

    Args:
        date_str: Date string
        today: Reference date for relative expressions, defaults to today

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in simple:
        return simple[text]

    offsets = {"last": -1, "this": 0, "next": 1}
    qualifier, _, period = text.partition(" ")
    if qualifier in offsets and period:
        start = _period_start(period, offsets[qualifier], today)
        if start is not None:
            return start
        if qualifier == "last" and period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Args:
        period: One of PERIODS
        today: Reference date, defaults to today

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    if key not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
    if today is None:
        today = date.today()

    qualifier, _, unit = key.partition("-")
    current_start = _period_start(unit, 0, today)
    if qualifier == "this":
        return current_start, today
    previous_start = _period_start(unit, -1, today)
    return previous_start, current_start - timedelta(days=1)
