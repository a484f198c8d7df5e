"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from farmledger.utils.date_parser import PERIODS, parse_date, get_date_range


def test_parse_absolute_date():
    """Test parsing ISO dates as entered for expenses."""
    assert parse_date("2025-04-10") == date(2025, 4, 10)
    assert parse_date("  2025-05-20 ") == date(2025, 5, 20)


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    # These should all work via dateutil parser
    assert parse_date("April 10, 2025") == date(2025, 4, 10)
    assert parse_date("20/05/2025") == date(2025, 5, 20)


@pytest.mark.parametrize(
    "text, delta",
    [("today", 0), ("yesterday", -1), ("tomorrow", 1), ("TODAY", 0)],
)
def test_parse_named_days(text, delta):
    assert parse_date(text) == date.today() + timedelta(days=delta)


def test_parse_future_offsets():
    """Test offsets used for due dates."""
    today = date.today()
    assert parse_date("in 14 days") == today + timedelta(days=14)
    assert parse_date("in 2 weeks") == today + timedelta(weeks=2)
    assert parse_date("in 1 month") == today + relativedelta(months=1)
    assert parse_date("3 days") == today + timedelta(days=3)


def test_parse_past_offsets():
    today = date.today()
    assert parse_date("2 days ago") == today - timedelta(days=2)
    assert parse_date("1 week ago") == today - timedelta(weeks=1)
    assert parse_date("6 months ago") == today - relativedelta(months=6)


def test_parse_offset_with_in_and_ago_is_invalid():
    with pytest.raises(ValueError):
        parse_date("in 2 days ago")


def test_parse_last_next_week():
    """Test 'last week' and 'next week' resolve to Mondays."""
    today = date.today()
    monday = today - timedelta(days=today.weekday())
    assert parse_date("last week") == monday - timedelta(weeks=1)
    assert parse_date("this week") == monday
    assert parse_date("next week") == monday + timedelta(weeks=1)
    assert parse_date("next week").weekday() == 0


def test_parse_month_and_year():
    today = date.today()
    assert parse_date("this month") == today.replace(day=1)
    assert parse_date("next month") == today.replace(day=1) + relativedelta(months=1)
    assert parse_date("last year") == date(today.year - 1, 1, 1)


def test_parse_weekdays():
    """Test 'last friday' is in the past week and 'next friday' in the coming one."""
    today = date.today()
    last_friday = parse_date("last friday")
    next_friday = parse_date("next friday")

    assert last_friday.weekday() == 4
    assert 1 <= (today - last_friday).days <= 7
    assert next_friday.weekday() == 4
    assert 1 <= (next_friday - today).days <= 7


def test_parse_invalid():
    """Test parsing invalid dates."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("last invalid")
    with pytest.raises(ValueError):
        parse_date("gibberish")


def test_get_date_range_this_periods_end_today():
    today = date.today()
    assert get_date_range("this-week") == (today - timedelta(days=today.weekday()), today)
    assert get_date_range("this-month") == (today.replace(day=1), today)
    assert get_date_range("this-year") == (date(today.year, 1, 1), today)


def test_get_date_range_last_week():
    """Test get_date_range for last-week covers Monday to Sunday."""
    start, end = get_date_range("last-week")
    assert start.weekday() == 0
    assert end.weekday() == 6
    assert (end - start).days == 6
    assert end < date.today()


def test_get_date_range_last_month():
    """Test get_date_range for last-month."""
    today = date.today()
    start, end = get_date_range("last-month")
    assert start == (today - relativedelta(months=1)).replace(day=1)
    assert end == today.replace(day=1) - timedelta(days=1)
    assert end.month == start.month


def test_get_date_range_last_year():
    today = date.today()
    assert get_date_range("last-year") == (date(today.year - 1, 1, 1), date(today.year - 1, 12, 31))


def test_every_period_is_supported():
    for period in PERIODS:
        start, end = get_date_range(period)
        assert start <= end


def test_get_date_range_invalid_period():
    """Test get_date_range with invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
