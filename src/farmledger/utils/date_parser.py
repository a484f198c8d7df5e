"""Date parsing utilities."""

import re
from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")

_OFFSET_PATTERN = re.compile(r"^(in )?(\d+) (day|week|month)s?( ago)?$")


def _parse_offset(date_str: str, today: date) -> date | None:
    """Handle "in 10 days", "2 weeks ago", "3 months"."""
    match = _OFFSET_PATTERN.match(date_str)
    if match is None:
        return None
    prefix, count, unit, suffix = match.groups()
    if prefix and suffix:
        return None
    count = int(count)
    if suffix:
        count = -count
    if unit == "day":
        return today + timedelta(days=count)
    if unit == "week":
        return today + timedelta(weeks=count)
    return today + relativedelta(months=count)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2025-04-10", "April 10, 2025") and relative ones:
    - "today", "yesterday", "tomorrow"
    - "last/this/next" + week, month, year (first day of that period)
    - "last/next" + weekday name
    - "in 10 days", "2 weeks ago", "3 months" (offsets, future unless "ago")

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    offset = _parse_offset(date_str, today)
    if offset is not None:
        return offset

    direction, _, period = date_str.partition(" ")
    if direction in ("last", "this", "next") and period:
        step = {"last": -1, "this": 0, "next": 1}[direction]
        if period == "week":
            return today - timedelta(days=today.weekday()) + timedelta(weeks=step)
        if period == "month":
            return today.replace(day=1) + relativedelta(months=step)
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=step)
        if period in WEEKDAYS and step != 0:
            target = WEEKDAYS.index(period)
            if step < 0:
                days_ago = (today.weekday() - target) % 7 or 7
                return today - timedelta(days=days_ago)
            days_ahead = (target - today.weekday()) % 7 or 7
            return today + timedelta(days=days_ahead)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the full previous
    week, month or year.

    Args:
        period: One of PERIODS

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)

    if period == "this-week":
        return (week_start, today)
    if period == "this-month":
        return (month_start, today)
    if period == "this-year":
        return (year_start, today)
    if period == "last-week":
        start_date = week_start - timedelta(days=7)
        return (start_date, start_date + timedelta(days=6))
    if period == "last-month":
        return (month_start - relativedelta(months=1), month_start - timedelta(days=1))
    if period == "last-year":
        return (year_start - relativedelta(years=1), year_start - timedelta(days=1))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
