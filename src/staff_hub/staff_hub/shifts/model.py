from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.constants import NANOS_PER_MILLI, PAID_LEAVE_PREFIX, SICKNESS_PREFIX, UNPAID_LEAVE_PREFIX
from ..core.enums import ShiftCategory

_MILLIS_PER_HOUR = 60 * 60 * 1000

CATEGORY_PREFIXES: dict[ShiftCategory, str] = {
    ShiftCategory.PAID_LEAVE: PAID_LEAVE_PREFIX,
    ShiftCategory.UNPAID_LEAVE: UNPAID_LEAVE_PREFIX,
    ShiftCategory.SICKNESS: SICKNESS_PREFIX,
}


def split_category_prefix(department: str) -> tuple[ShiftCategory, str]:
    """Parse a historical ``[SICKNESS] Bar`` style department string.

    Prefix matching is exact and case-sensitive; anything else is worked time
    and the label is returned unchanged.
    """

    for category, prefix in CATEGORY_PREFIXES.items():
        if department.startswith(prefix):
            return category, department[len(prefix):]
    return ShiftCategory.WORKED, department


@dataclass(frozen=True)
class Shift:
    """Domain entity: one rota entry.

    ``date`` identifies the calendar day; ``start_time``/``end_time`` are full
    timestamps on that day. All three are nanosecond timestamps.
    """

    id: str
    date: int
    start_time: int
    end_time: int
    department: str
    assigned_employees: tuple[str, ...]
    category: ShiftCategory = ShiftCategory.WORKED

    @classmethod
    def from_legacy(
        cls,
        *,
        id: str,
        date: int,
        start_time: int,
        end_time: int,
        department: str,
        assigned_employees: Sequence[str],
    ) -> "Shift":
        category, label = split_category_prefix(department)
        return cls(
            id=id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            department=label,
            assigned_employees=tuple(assigned_employees),
            category=category,
        )

    @property
    def legacy_department(self) -> str:
        return CATEGORY_PREFIXES.get(self.category, "") + self.department

    @property
    def duration_hours(self) -> float:
        millis = self.end_time // NANOS_PER_MILLI - self.start_time // NANOS_PER_MILLI
        return millis / _MILLIS_PER_HOUR


@dataclass(frozen=True)
class ShiftNote:
    id: str
    shift_id: str
    note_text: str
    created_timestamp: int
    employee_id: Optional[str] = None
