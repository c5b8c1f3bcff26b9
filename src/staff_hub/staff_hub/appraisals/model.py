from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AppraisalType


@dataclass(frozen=True)
class AppraisalRecord:
    id: str
    employee_id: str
    scheduled_date: int
    appraisal_type: AppraisalType
    notes: str
    is_complete: bool
