from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from ..common.datetime_utils import DateLike, start_of_day, try_ns_to_datetime
from .model import Shift


@dataclass(frozen=True)
class RotaDay:
    day: datetime
    shifts: tuple[Shift, ...]


def group_shifts_by_day(week: Sequence[DateLike], shifts: Iterable[Shift]) -> list[RotaDay]:
    """Bucket shifts onto the days of ``week`` by local calendar date.

    Each bucket is ordered by ``start_time`` (stable for ties). Shifts dated
    outside the week, or whose date cannot be decoded, are left out.
    """

    buckets: dict[date, list[Shift]] = {start_of_day(d).date(): [] for d in week}
    for shift in shifts:
        shift_day = try_ns_to_datetime(shift.date)
        if shift_day is None:
            continue
        bucket = buckets.get(shift_day.date())
        if bucket is not None:
            bucket.append(shift)

    return [
        RotaDay(
            day=start_of_day(d),
            shifts=tuple(sorted(buckets[start_of_day(d).date()], key=lambda s: s.start_time)),
        )
        for d in week
    ]
