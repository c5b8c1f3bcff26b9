from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import HolidayRequestStatus


@dataclass(frozen=True)
class HolidayRequest:
    id: str
    employee_id: str
    start_date: int
    end_date: int
    status: HolidayRequestStatus
    created_at: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class HolidayStatistics:
    pending: int
    approved: int
    declined: int
    total_approved_days: int
