from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SicknessRecord:
    id: str
    employee_id: str
    absence_start_date: int
    absence_end_date: int
    reason: str = ""
    return_note: str = ""
