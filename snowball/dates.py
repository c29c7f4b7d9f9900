"""Calendar helpers used for projection stepping and deadline comparisons."""

from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal


_MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    if month < 1 or month > 12:
        raise ValueError(f"Invalid month: {month}. Month must be between 1 and 12.")
    return calendar.monthrange(year, month)[1]


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole months, clamping to the last day of the target month.

    Jan 31 + 1 month is Feb 28 (or Feb 29 in a leap year), never early March.
    """
    index = value.year * 12 + (value.month - 1) + months
    year, month_index = divmod(index, 12)
    month = month_index + 1
    day = min(value.day, days_in_month(year, month))
    return value.replace(year=year, month=month, day=day)


def add_years(value: date, years: int) -> date:
    return add_months(value, years * 12)


def months_between(start: date, end: date) -> Decimal:
    """Whole months between two dates plus the leftover days as a fraction.

    The fractional part is measured against the length of the start month.
    """
    total = Decimal((end.year - start.year) * 12 + (end.month - start.month))
    day_diff = end.day - start.day
    if day_diff:
        total += Decimal(day_diff) / Decimal(days_in_month(start.year, start.month))
    return total


def days_between(start: date, end: date) -> int:
    return (end - start).days


def first_day_of_month(value: date) -> date:
    return value.replace(day=1)


def last_day_of_month(value: date) -> date:
    return value.replace(day=days_in_month(value.year, value.month))


def parse_date(raw: str) -> date:
    parts = raw.split("-")
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Invalid date format: {raw}. Expected YYYY-MM-DD.")
    try:
        year, month, day = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError as exc:
        raise ValueError(f"Invalid date format: {raw}. Expected YYYY-MM-DD.") from exc


def format_date(value: date) -> str:
    return value.isoformat()


def format_month_year(value: date) -> str:
    return f"{_MONTH_NAMES[value.month - 1]} {value.year}"


def today() -> date:
    return date.today()
