"""Conversions between calendar values and nanosecond timestamps.

Every stored point in time is an integer count of nanoseconds since the Unix
epoch. Calendar arithmetic always goes through a millisecond intermediate
(``ns // 1_000_000`` on the way out, ``ms * 1_000_000`` on the way back) and
works on naive local ``datetime`` values.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..core.constants import (
    BUSINESS_WEEK_START_WEEKDAY,
    DAYS_PER_WEEK,
    EXPIRING_SOON_DAYS,
    MILLIS_PER_DAY,
    NANOS_PER_MILLI,
)
from ..core.enums import ExpiryStatus
from ..core.exceptions import ValidationError

DateLike = Union[date, datetime]


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def ns_to_millis(ns: int) -> int:
    if isinstance(ns, bool) or not isinstance(ns, int):
        raise TypeError(f"Expected an integer nanosecond timestamp, got {type(ns)!r}")
    return ns // NANOS_PER_MILLI


def ns_to_datetime(ns: int) -> datetime:
    ms = ns_to_millis(ns)
    return datetime.fromtimestamp(ms // 1000) + timedelta(milliseconds=ms % 1000)


def try_ns_to_datetime(ns: object) -> Optional[datetime]:
    """Like ns_to_datetime, but None for values that cannot be decoded."""
    try:
        return ns_to_datetime(ns)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def datetime_to_ns(value: DateLike) -> int:
    ms = int(round(_as_datetime(value).timestamp() * 1000))
    return ms * NANOS_PER_MILLI


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_hh_mm(value: str) -> time:
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def date_to_timestamp(date_str: str) -> int:
    """Local midnight of ``date_str`` in nanoseconds."""
    return datetime_to_ns(parse_iso_date(date_str))


def optional_date_to_timestamp(date_str: Optional[str]) -> Optional[int]:
    """Blank inputs mean the date was left empty on the form."""
    if not (date_str or "").strip():
        return None
    return date_to_timestamp(date_str)


def date_time_to_timestamp(date_str: str, time_str: str) -> int:
    return datetime_to_ns(datetime.combine(parse_iso_date(date_str), parse_hh_mm(time_str)))


def timestamp_to_date_input(ns: int) -> str:
    return ns_to_datetime(ns).strftime("%Y-%m-%d")


def timestamp_to_time_input(ns: int) -> str:
    return ns_to_datetime(ns).strftime("%H:%M")


def format_date(ns: int) -> str:
    return ns_to_datetime(ns).strftime("%d %b %Y")


def format_time(ns: int) -> str:
    return ns_to_datetime(ns).strftime("%H:%M")


def format_date_time(ns: int) -> str:
    return f"{format_date(ns)} {format_time(ns)}"


def is_expired(ns: int, *, now: Optional[datetime] = None) -> bool:
    """True if the instant is strictly before now. Guard optional fields first."""
    return ns_to_datetime(ns) < (now or now_local())


def is_expiring_soon(ns: int, *, now: Optional[datetime] = None) -> bool:
    diff = ns_to_datetime(ns) - (now or now_local())
    return timedelta(0) < diff < timedelta(days=EXPIRING_SOON_DAYS)


def expiry_status(ns: Optional[int], *, now: Optional[datetime] = None) -> Optional[ExpiryStatus]:
    """None when the record has no expiry date."""
    if ns is None:
        return None
    now = now or now_local()
    if is_expired(ns, now=now):
        return ExpiryStatus.EXPIRED
    if is_expiring_soon(ns, now=now):
        return ExpiryStatus.EXPIRING_SOON
    return ExpiryStatus.VALID


def is_same_day(a: DateLike, b: DateLike) -> bool:
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def days_between(start_ns: int, end_ns: int) -> int:
    diff_ms = ns_to_millis(end_ns) - ns_to_millis(start_ns)
    return math.ceil(diff_ms / MILLIS_PER_DAY)


def add_months(value: DateLike, months: int) -> datetime:
    """Calendar-month addition; the day is clamped to the target month's length."""
    dt = _as_datetime(value)
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def current_month(*, now: Optional[datetime] = None) -> str:
    return (now or now_local()).strftime("%Y-%m")


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(_as_datetime(value).date(), time.min)


def end_of_day(value: DateLike) -> datetime:
    return datetime.combine(_as_datetime(value).date(), time(23, 59, 59, 999000))


def js_weekday(value: DateLike) -> int:
    """Weekday numbered Sunday=0 .. Saturday=6."""
    return (value.weekday() + 1) % 7


def get_week_dates(reference: DateLike) -> list[datetime]:
    """The Thursday-to-Wednesday business week containing ``reference``.

    Index 0 is the most recent Thursday at or before ``reference``; every
    element is a midnight ``datetime``.
    """

    days_from_thursday = (js_weekday(reference) - BUSINESS_WEEK_START_WEEKDAY + 7) % 7
    thursday = start_of_day(reference) - timedelta(days=days_from_thursday)
    return [thursday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def week_range(reference: DateLike) -> tuple[datetime, datetime]:
    week = get_week_dates(reference)
    return week[0], end_of_day(week[-1])
