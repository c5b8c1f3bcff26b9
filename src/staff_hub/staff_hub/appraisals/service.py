from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import date_to_timestamp
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty
from ..core.enums import AppraisalType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from .model import AppraisalRecord
from .projector import AppraisalProjection, project
from .repository import AppraisalRepository

logger = logging.getLogger(__name__)

_APPRAISER_ROLES = {Role.ADMIN, Role.MANAGER}


@dataclass(frozen=True)
class AppraisalDashboardRow:
    employee: Employee
    projection: AppraisalProjection


class AppraisalService:
    def __init__(
        self,
        appraisals: AppraisalRepository,
        employees: EmployeeService,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._appraisals = appraisals
        self._employees = employees
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[AppraisalRecord]:
        return list(self._cache.get_or_fetch(("appraisals",), self._appraisals.list_all))

    def list_for_employee(self, employee_id: str) -> list[AppraisalRecord]:
        """Newest first."""

        records = self._cache.get_or_fetch(
            ("appraisals", employee_id),
            lambda: self._appraisals.list_for_employee(employee_id),
        )
        return sorted(records, key=lambda r: r.scheduled_date, reverse=True)

    def get(self, record_id: str) -> AppraisalRecord:
        record = self._appraisals.get_by_id(record_id)
        if not record:
            raise NotFoundError("Appraisal not found")
        return record

    def projection_for(self, employee_id: str, *, now: datetime) -> AppraisalProjection:
        return project(self.list_for_employee(employee_id), now)

    def dashboard(self, *, current_role: Role, now: datetime) -> list[AppraisalDashboardRow]:
        """One row per active employee."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        by_employee: dict[str, list[AppraisalRecord]] = defaultdict(list)
        for record in self.list_all():
            by_employee[record.employee_id].append(record)

        return [
            AppraisalDashboardRow(employee=e, projection=project(by_employee.get(e.id, []), now))
            for e in self._employees.list_active()
        ]

    def schedule(
        self,
        *,
        current_role: Role,
        employee_id: str,
        scheduled_date: str,
        appraisal_type: AppraisalType,
        notes: str = "",
        is_complete: bool = False,
    ) -> str:
        if current_role not in _APPRAISER_ROLES:
            raise AuthorizationError("Only managers can schedule appraisals")

        employee = self._employees.get(require_non_empty(employee_id, "Employee"))
        record = AppraisalRecord(
            id=self._new_id(),
            employee_id=employee.id,
            scheduled_date=date_to_timestamp(scheduled_date),
            appraisal_type=appraisal_type,
            notes=(notes or "").strip(),
            is_complete=bool(is_complete),
        )
        self._appraisals.add(record)
        self._cache.invalidate("appraisals")
        logger.info("Scheduled %s appraisal %s for %s", appraisal_type.value, record.id, employee.id)
        return record.id

    def update(self, *, current_role: Role, record: AppraisalRecord) -> None:
        """Replace the record with the same id."""

        if current_role not in _APPRAISER_ROLES:
            raise AuthorizationError("Only managers can edit appraisals")

        existing = self._appraisals.get_by_id(record.id)
        if not existing:
            raise NotFoundError("Appraisal not found")
        if existing.employee_id != record.employee_id:
            raise ValidationError("An appraisal cannot be moved to another employee")

        self._appraisals.replace(record)
        self._cache.invalidate("appraisals")
        logger.info("Updated appraisal %s", record.id)

    def mark_complete(self, *, current_role: Role, record_id: str, notes: str = "") -> None:
        existing = self.get(record_id)
        if existing.is_complete:
            raise ValidationError("Appraisal is already complete")

        notes = (notes or "").strip() or existing.notes
        self.update(current_role=current_role, record=replace(existing, is_complete=True, notes=notes))
