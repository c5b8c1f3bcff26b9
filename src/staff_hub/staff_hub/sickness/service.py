from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..common.datetime_utils import date_to_timestamp, days_between
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty, require_ordered
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from .model import SicknessRecord
from .repository import SicknessRepository

logger = logging.getLogger(__name__)

_RECORDER_ROLES = {Role.ADMIN, Role.MANAGER}


def absence_days(record: SicknessRecord) -> int:
    return days_between(record.absence_start_date, record.absence_end_date)


@dataclass(frozen=True)
class SicknessHistory:
    records: tuple[SicknessRecord, ...]
    total_days: int


class SicknessService:
    def __init__(
        self,
        records: SicknessRepository,
        employees: EmployeeService,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._records = records
        self._employees = employees
        self._cache = cache
        self._new_id = id_factory

    def history(self, employee_id: str, *, current_role: Role, viewer_id: str) -> SicknessHistory:
        """Absences newest first, with the running total of days off."""

        if current_role not in _RECORDER_ROLES and viewer_id != employee_id:
            raise AuthorizationError("You can only view your own sickness record")

        records = self._cache.get_or_fetch(
            ("sicknessRecords", employee_id),
            lambda: self._records.list_for_employee(employee_id),
        )
        ordered = sorted(records, key=lambda r: r.absence_start_date, reverse=True)
        return SicknessHistory(records=tuple(ordered), total_days=sum(absence_days(r) for r in ordered))

    def get(self, record_id: str) -> SicknessRecord:
        record = self._records.get_by_id(record_id)
        if not record:
            raise NotFoundError("Sickness record not found")
        return record

    def add(
        self,
        *,
        current_role: Role,
        employee_id: str,
        absence_start_date: str,
        absence_end_date: str,
        reason: str = "",
        return_note: str = "",
    ) -> str:
        if current_role not in _RECORDER_ROLES:
            raise AuthorizationError("Only managers can record sickness")
        if not absence_start_date or not absence_end_date:
            raise ValidationError("Start and end dates are required")

        employee = self._employees.get(require_non_empty(employee_id, "Employee"))
        record = SicknessRecord(
            id=self._new_id(),
            employee_id=employee.id,
            absence_start_date=date_to_timestamp(absence_start_date),
            absence_end_date=date_to_timestamp(absence_end_date),
            reason=(reason or "").strip(),
            return_note=(return_note or "").strip(),
        )
        require_ordered(
            record.absence_start_date,
            record.absence_end_date,
            start_name="Start date",
            end_name="End date",
        )

        self._records.add(record)
        self._cache.invalidate("sicknessRecords", employee.id)
        logger.info("Recorded sickness %s for %s (%d days)", record.id, employee.id, absence_days(record))
        return record.id

    def update(self, *, current_role: Role, record: SicknessRecord) -> None:
        """Replace the record with the same id."""

        if current_role not in _RECORDER_ROLES:
            raise AuthorizationError("Only managers can edit sickness records")

        existing = self.get(record.id)
        if existing.employee_id != record.employee_id:
            raise ValidationError("A sickness record cannot be moved to another employee")
        require_ordered(
            record.absence_start_date,
            record.absence_end_date,
            start_name="Start date",
            end_name="End date",
        )

        if not self._records.replace(record):
            raise NotFoundError("Sickness record not found")
        self._cache.invalidate("sicknessRecords", record.employee_id)
        logger.info("Updated sickness record %s", record.id)
