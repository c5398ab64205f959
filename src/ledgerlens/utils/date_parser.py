"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _relative_date(text: str, today: date) -> Optional[date]:
    """Resolve words like "yesterday", "last month" or "last friday"."""
    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in simple:
        return simple[text]

    prefix, _, period = text.partition(" ")
    if prefix not in ("last", "this", "next") or not period:
        return None

    offset = {"last": -1, "this": 0, "next": 1}[prefix]
    if period == "month":
        return (today + relativedelta(months=offset)).replace(day=1)
    if period == "year":
        return today.replace(month=1, day=1) + relativedelta(years=offset)
    if period == "week":
        return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    if prefix == "last" and period in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15 Jan 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    relative = _relative_date(text, date.today())
    if relative is not None:
        return relative
    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str) -> datetime:
    """Parse a transaction instant.

    Relative words give midnight of that day; absolute strings keep any time
    of day they carry ("2024-01-15 09:30").

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    relative = _relative_date(text, date.today())
    if relative is not None:
        return datetime.combine(relative, time())
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def parse_month(value: str) -> date:
    """Parse a month such as "2024-03", "March 2024" or "last month".

    Returns:
        First day of the month
    """
    text = value.strip().lower()
    relative = _relative_date(text, date.today())
    if relative is None:
        try:
            relative = date_parser.parse(text, default=datetime(date.today().year, 1, 1)).date()
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse month '{value}': {e}")
    return relative.replace(day=1)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    "this-*" periods end today; "last-*" periods cover the whole previous
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

    ranges = {
        "this-week": (week_start, today),
        "this-month": (month_start, today),
        "this-year": (year_start, today),
        "last-week": (week_start - timedelta(weeks=1), week_start - timedelta(days=1)),
        "last-month": (month_start - relativedelta(months=1), month_start - timedelta(days=1)),
        "last-year": (year_start - relativedelta(years=1), year_start - timedelta(days=1)),
    }
    if period not in ranges:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )
    return ranges[period]
