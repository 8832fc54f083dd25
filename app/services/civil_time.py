"""Timezone-less date and time-of-day helpers.

Dates are plain ``datetime.date`` values and times are naive ``datetime.time``
values at minute precision. Once derived they are compared and stepped
directly, never re-derived through a timezone-aware object.
"""

import re
from datetime import date, time

from app.core.errors import InvalidDate, InvalidTime

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")

MINUTES_PER_DAY = 24 * 60


def parse_civil_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``. Impossible dates raise InvalidDate, never clamp."""
    m = _DATE_RE.match(value.strip()) if isinstance(value, str) else None
    if not m:
        raise InvalidDate(f"Invalid date {value!r}: expected YYYY-MM-DD")
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDate(f"Invalid date {value!r}: {e}") from e


def parse_civil_time(value: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` (as stored in Postgres TIME columns). Seconds are dropped."""
    m = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if not m:
        raise InvalidTime(f"Invalid time {value!r}: expected HH:MM")
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise InvalidTime(f"Invalid time {value!r}: out of range")
    return time(hour, minute)


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def from_minutes(minutes: int) -> time:
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise InvalidTime(f"{minutes} minutes is outside a single day")
    return time(minutes // 60, minutes % 60)


def format_civil_time(t: time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def day_of_week(d: date) -> int:
    """0 = Sunday ... 6 = Saturday, the convention of working_hours rows."""
    return (d.weekday() + 1) % 7


def is_weekend(d: date) -> bool:
    return day_of_week(d) in (0, 6)
