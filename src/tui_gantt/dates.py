"""Calendar arithmetic used by the timeline builder.

All functions are pure: they return new values and never mutate their
arguments. Datetimes are naive and interpreted in the local calendar.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

MILLIS_PER_DAY = 86_400_000

WEEKDAY_CODES = ["U", "M", "T", "W", "R", "F", "S"]  # Sunday first
WEEKDAY_LONG = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WEEKDAY_SHORT = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_LONG = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
MONTH_SHORT = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

INTERVAL_UNITS = ("years", "months", "weeks", "days", "hours", "minutes", "seconds")


class InvalidArgument(ValueError):
    """Raised for an unrecognized date interval unit."""


def from_epoch_millis(millis: int | float) -> datetime:
    """Convert a millisecond epoch instant to a naive local datetime."""
    return datetime.fromtimestamp(millis / 1000)


def to_epoch_millis(value: datetime) -> int:
    return round(value.timestamp() * 1000)


def date_without_time(value: datetime | date) -> datetime:
    """Return local midnight of the given day."""
    return datetime(value.year, value.month, value.day)


def day_difference(source: datetime | date, compare: datetime | date) -> int:
    """Whole days from *source* to *compare*, rounded to the nearest day."""
    delta = date_without_time(compare) - date_without_time(source)
    return round(delta / timedelta(milliseconds=MILLIS_PER_DAY))


def _add_months(value: datetime, months: int) -> datetime:
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def add_interval(value: datetime, unit: str, amount: int) -> datetime:
    """Return *value* moved by *amount* of *unit*.

    Year and month steps clamp the day of month to the target month's length.
    Raises InvalidArgument for units outside INTERVAL_UNITS.
    """
    if unit == "years":
        return _add_months(value, amount * 12)
    elif unit == "months":
        return _add_months(value, amount)
    elif unit == "weeks":
        return value + timedelta(weeks=amount)
    elif unit == "days":
        return value + timedelta(days=amount)
    elif unit == "hours":
        return value + timedelta(hours=amount)
    elif unit == "minutes":
        return value + timedelta(minutes=amount)
    elif unit == "seconds":
        return value + timedelta(seconds=amount)
    raise InvalidArgument(f"Unknown date interval unit: {unit!r}")


def is_today(value: datetime | date, today: date | None = None) -> bool:
    """Compare year/month/day only."""
    today = today or date.today()
    return (value.year, value.month, value.day) == (today.year, today.month, today.day)


def _sunday_index(value: datetime | date) -> int:
    # Python weekday(): Monday=0 .. Sunday=6
    return (value.weekday() + 1) % 7


def weekday_code(value: datetime | date) -> str:
    """Single-letter weekday code: U M T W R F S."""
    return WEEKDAY_CODES[_sunday_index(value)]


def weekday_name(value: datetime | date, short: bool = False) -> str:
    names = WEEKDAY_SHORT if short else WEEKDAY_LONG
    return names[_sunday_index(value)]


def month_name(value: datetime | date, short: bool = False) -> str:
    names = MONTH_SHORT if short else MONTH_LONG
    return names[value.month - 1]


def date_label(value: datetime | date, leading_zero: bool = False) -> str:
    """Format as M/D/YYYY, or MM/DD/YYYY with *leading_zero*."""
    if leading_zero:
        return f"{value.month:02d}/{value.day:02d}/{value.year}"
    return f"{value.month}/{value.day}/{value.year}"
