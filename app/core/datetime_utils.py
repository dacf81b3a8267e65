"""
Date utilities for calendar-month reporting windows
"""

import re
from calendar import monthrange
from datetime import date, datetime
from typing import Optional, Tuple, Union

MONTH_LABELS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

MIN_REPORT_YEAR = 1900
MAX_REPORT_YEAR = 2100

_MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def today() -> date:
    return date.today()


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month (both inclusive)"""
    days_in_month = monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days_in_month)


def previous_month(year: int, month: int) -> Tuple[int, int]:
    """The calendar month before (year, month), rolling back over January"""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def current_month_bounds(reference: Optional[date] = None) -> Tuple[date, date]:
    reference = reference or today()
    return month_bounds(reference.year, reference.month)


def is_month_string(value: Optional[str]) -> bool:
    """True for strings shaped like YYYY-MM"""
    return bool(value) and bool(_MONTH_PATTERN.match(value))


def parse_month(value: str) -> Optional[Tuple[int, int]]:
    """
    Split a YYYY-MM string into (year, month).

    Returns None when the year is zero or the month lies outside 1..12.
    """
    year_str, month_str = value.split('-')
    year, month = int(year_str), int(month_str)
    if not year or month < 1 or month > 12:
        return None
    return year, month


def resolve_report_year(year: Optional[Union[int, str]], reference: Optional[date] = None) -> int:
    """
    Requested reporting year, falling back to the current year when missing,
    unparseable, or outside [1900, 2100].
    """
    fallback = (reference or today()).year
    if year is None or year == "":
        return fallback
    try:
        parsed = int(year)
    except (TypeError, ValueError):
        return fallback
    if parsed < MIN_REPORT_YEAR or parsed > MAX_REPORT_YEAR:
        return fallback
    return parsed


def month_label(month: int) -> str:
    return MONTH_LABELS[month - 1]


def format_date(value: Optional[Union[date, datetime, str]]) -> Optional[str]:
    """Render a date (or ISO datetime string) as YYYY-MM-DD"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).split('T')[0]


def parse_date(value: Optional[Union[date, str]]) -> Optional[date]:
    """
    Parse YYYY-MM-DD (or a full ISO datetime) into a date.
    Returns None when the value is not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    except ValueError:
        return None
