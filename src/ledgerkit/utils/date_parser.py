"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("daily", "weekly", "monthly", "quarterly", "yearly")

_DAY_OFFSETS = {"yesterday": -1, "today": 0, "tomorrow": 1}
_SHIFTS = {"last": -1, "this": 0, "next": 1}
_UNITS = {"week": "weekly", "month": "monthly", "year": "yearly"}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", and "last/this/next" followed by
    week, month or year, which resolve to the first day of that period.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = " ".join(date_str.strip().lower().split())
    if today is None:
        today = date.today()

    if text in _DAY_OFFSETS:
        return today + timedelta(days=_DAY_OFFSETS[text])

    words = text.split(" ")
    if len(words) == 2 and words[0] in _SHIFTS and words[1] in _UNITS:
        return _shifted_period_start(_UNITS[words[1]], today, _SHIFTS[words[0]])

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _shifted_period_start(period: str, reference: date, shift: int) -> date:
    start, _end = get_date_range(period, reference)
    if period == "weekly":
        return start + timedelta(weeks=shift)
    if period == "monthly":
        return start + relativedelta(months=shift)
    return start + relativedelta(years=shift)


def get_date_range(period: str, reference: date) -> tuple[date, date]:
    """Get the inclusive start and end dates of the period containing a date.

    Weeks start on Monday. Quarters start in January, April, July and October.

    Args:
        period: One of daily, weekly, monthly, quarterly, yearly
        reference: Any date inside the wanted period

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()

    if period == "daily":
        return (reference, reference)

    if period == "weekly":
        start = reference - timedelta(days=reference.weekday())
        return (start, start + timedelta(days=6))

    if period == "monthly":
        start = reference.replace(day=1)
        return (start, start + relativedelta(months=1, days=-1))

    if period == "quarterly":
        start = reference.replace(month=3 * ((reference.month - 1) // 3) + 1, day=1)
        return (start, start + relativedelta(months=3, days=-1))

    if period == "yearly":
        return (reference.replace(month=1, day=1), reference.replace(month=12, day=31))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
