"""Date arithmetic and timestamp helpers.

Deadlines are stored as absolute instants but chosen as local calendar days,
so everything that turns an instant back into a day goes through the local
timezone here.
"""

from __future__ import annotations

import time
from datetime import date, datetime
from typing import Optional

END_OF_DAY = (23, 59, 59)
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
INVALID_DATE = "Invalid date"

DAYS_OF_WEEK = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def is_leap_year(year):
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year, month):
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    if month in (4, 6, 9, 11):
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    raise ValueError(f"month must be 1-12, got {month}")


def first_weekday(year, month):
    """Weekday of the 1st of the month, Monday=0 .. Sunday=6."""
    return date(year, month, 1).weekday()


def month_grid(year, month):
    """Week rows of seven day numbers, padded with None on both ends."""
    cells = [None] * first_weekday(year, month)
    cells.extend(range(1, days_in_month(year, month) + 1))
    while len(cells) % 7:
        cells.append(None)
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def date_to_timestamp(value: date) -> int:
    """Absolute instant of 23:59:59 local time on `value`."""
    return int(datetime(value.year, value.month, value.day, *END_OF_DAY).timestamp())


def timestamp_to_date(timestamp: int) -> date:
    return datetime.fromtimestamp(timestamp).date()


def try_timestamp_to_date(timestamp) -> Optional[date]:
    """Like timestamp_to_date, but None for instants datetime cannot represent."""
    try:
        return timestamp_to_date(timestamp)
    except (OverflowError, OSError, ValueError):
        return None


def timestamp_matches_day(timestamp, year, month, day):
    local = try_timestamp_to_date(timestamp)
    if local is None:
        return False
    return (local.year, local.month, local.day) == (year, month, day)


def day_bounds(value: date) -> tuple[int, int]:
    start = int(datetime(value.year, value.month, value.day).timestamp())
    return start, date_to_timestamp(value)


def is_future(timestamp, now=None):
    if now is None:
        now = int(time.time())
    return timestamp > now


def parse_iso_date(raw: str) -> date:
    return datetime.strptime(raw.strip(), "%Y-%m-%d").date()


def _format(timestamp, fmt):
    try:
        local = datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return INVALID_DATE
    return local.strftime(fmt)


def format_date(timestamp):
    return _format(timestamp, "%b %d, %Y")


def format_date_time(timestamp):
    return _format(timestamp, "%b %d, %Y at %H:%M")


def format_short(timestamp):
    return _format(timestamp, "%Y-%m-%d %H:%M")


def format_long_date(value: date) -> str:
    return value.strftime("%A, %B %d, %Y")
