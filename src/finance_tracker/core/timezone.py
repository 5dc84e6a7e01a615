"""Timezone utilities. All stored timestamps are UTC."""

from datetime import datetime, timedelta
from typing import Optional

import pytz
from dateutil import parser as date_parser

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as already UTC."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_datetime_utc(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in UTC.

    Accepts ISO 8601 as well as RFC 2822 strings such as
    ``Mon, 19 Oct 2026 00:02:31 +0000``. If no timezone is present,
    ``default_tz`` (UTC by default) is assumed.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or UTC
        dt = tz.localize(dt)
    return to_utc(dt)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Return [start, end) UTC datetimes for a calendar month."""
    start = UTC.localize(datetime(year, month, 1))
    if month == 12:
        end = UTC.localize(datetime(year + 1, 1, 1))
    else:
        end = UTC.localize(datetime(year, month + 1, 1))
    return start, end


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before the given one."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def to_naive_utc(dt: datetime) -> datetime:
    """Drop tzinfo after converting to UTC; stored timestamps are naive UTC."""
    return to_utc(dt).replace(tzinfo=None)


def week_bounds(dt: datetime) -> tuple[datetime, datetime]:
    """Return [start, end) UTC datetimes of the Monday-based week containing ``dt``."""
    day = to_utc(dt).replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    start = UTC.localize(day - timedelta(days=day.weekday()))
    return start, start + timedelta(days=7)


def year_bounds(year: int) -> tuple[datetime, datetime]:
    """Return [start, end) UTC datetimes for a calendar year."""
    return UTC.localize(datetime(year, 1, 1)), UTC.localize(datetime(year + 1, 1, 1))
