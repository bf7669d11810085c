from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_DAY_CODES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def parse_utc_offset(value: str) -> timezone:
    """Turn an offset such as '+05:30' or '-0400' into a fixed timezone."""
    m = _OFFSET_RE.match((value or "").strip())
    if not m:
        raise ValueError(f"Invalid UTC offset: {value!r}")
    sign, hours, minutes = m.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    if delta >= timedelta(hours=24):
        raise ValueError(f"UTC offset out of range: {value!r}")
    return timezone(-delta if sign == "-" else delta)


def civil_date(instant: datetime, tz: tzinfo) -> date:
    return instant.astimezone(tz).date()


def format_time(instant: datetime, tz: tzinfo) -> str:
    """Wall-clock HH:MM:SS of an instant in the civil timezone."""
    return instant.astimezone(tz).strftime("%H:%M:%S")


def time_to_minutes(value: str) -> int:
    """Minutes from midnight for 'HH:MM' or 'HH:MM:SS' (seconds ignored)."""
    parts = value.split(":")
    return int(parts[0]) * 60 + int(parts[1])


def day_code(value: date) -> str:
    return _DAY_CODES[value.weekday()]


def month_start(value: date) -> date:
    return value.replace(day=1)


def month_end(value: date) -> date:
    last_day = calendar.monthrange(value.year, value.month)[1]
    return value.replace(day=last_day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
