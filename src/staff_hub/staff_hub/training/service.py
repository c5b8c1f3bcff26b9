from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import expiry_status, optional_date_to_timestamp
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty, require_ordered
from ..core.enums import ExpiryStatus, Role, TrainingStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..employees.service import EmployeeService
from .model import TrainingRecord, TrainingSummaryRow
from .repository import TrainingRepository

logger = logging.getLogger(__name__)

_VIEW_ANY_ROLES = {Role.ADMIN, Role.MANAGER}


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


def _check_dates(record: TrainingRecord) -> None:
    if record.completion_date is not None and record.expiry_date is not None:
        require_ordered(
            record.completion_date,
            record.expiry_date,
            start_name="Completion date",
            end_name="Expiry date",
        )


def summarise(
    employee_records: list[TrainingRecord],
    *,
    now: datetime,
) -> tuple[tuple[str, ...], int, int]:
    """Experiences signed off (completed records only, first seen first) plus expiry counts."""

    experiences: list[str] = []
    expired = expiring_soon = 0
    for record in employee_records:
        if record.status == TrainingStatus.COMPLETED and record.experience and record.experience not in experiences:
            experiences.append(record.experience)
        status = expiry_status(record.expiry_date, now=now)
        if status == ExpiryStatus.EXPIRED:
            expired += 1
        elif status == ExpiryStatus.EXPIRING_SOON:
            expiring_soon += 1
    return tuple(experiences), expired, expiring_soon


class TrainingService:
    def __init__(
        self,
        records: TrainingRepository,
        employees: EmployeeService,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._records = records
        self._employees = employees
        self._cache = cache
        self._new_id = id_factory

    def list_for_employee(
        self,
        employee_id: str,
        *,
        current_role: Role,
        viewer_id: str,
    ) -> list[TrainingRecord]:
        if current_role not in _VIEW_ANY_ROLES and viewer_id != employee_id:
            raise AuthorizationError("You can only view your own training")

        return list(
            self._cache.get_or_fetch(
                ("trainingRecords", employee_id),
                lambda: self._records.list_for_employee(employee_id),
            )
        )

    def get(self, record_id: str) -> TrainingRecord:
        record = self._records.get_by_id(record_id)
        if not record:
            raise NotFoundError("Training record not found")
        return record

    def add(
        self,
        *,
        current_role: Role,
        employee_id: str,
        title: str,
        description: str = "",
        status: TrainingStatus = TrainingStatus.PENDING,
        completion_date: Optional[str] = None,
        expiry_date: Optional[str] = None,
    ) -> str:
        _require_admin(current_role)

        employee = self._employees.get(require_non_empty(employee_id, "Employee"))
        record = TrainingRecord(
            id=self._new_id(),
            employee_id=employee.id,
            title=require_non_empty(title, "Title"),
            description=(description or "").strip(),
            status=status,
            completion_date=optional_date_to_timestamp(completion_date),
            expiry_date=optional_date_to_timestamp(expiry_date),
        )
        _check_dates(record)

        self._records.add(record)
        self._cache.invalidate("trainingRecords")
        logger.info("Added training %s (%s) for %s", record.id, record.title, employee.id)
        return record.id

    def update(self, *, current_role: Role, record: TrainingRecord) -> None:
        _require_admin(current_role)

        existing = self.get(record.id)
        if existing.employee_id != record.employee_id:
            raise ValidationError("A training record cannot be moved to another employee")
        require_non_empty(record.title, "Title")
        _check_dates(record)

        if not self._records.replace(record):
            raise NotFoundError("Training record not found")
        self._cache.invalidate("trainingRecords")
        logger.info("Updated training %s", record.id)

    def delete(self, *, current_role: Role, record_id: str) -> None:
        _require_admin(current_role)

        if not self._records.delete(record_id):
            raise NotFoundError("Training record not found")
        self._cache.invalidate("trainingRecords")
        logger.info("Deleted training %s", record_id)

    def summary(self, *, current_role: Role, now: datetime) -> list[TrainingSummaryRow]:
        """One row per active employee, in roster order."""

        _require_admin(current_role)

        by_employee: dict[str, list[TrainingRecord]] = defaultdict(list)
        for record in self._cache.get_or_fetch(("trainingRecords",), self._records.list_all):
            by_employee[record.employee_id].append(record)

        rows = []
        for employee in self._employees.list_active():
            experiences, expired, expiring_soon = summarise(by_employee.get(employee.id, []), now=now)
            rows.append(
                TrainingSummaryRow(
                    employee=employee,
                    experiences=experiences,
                    expired=expired,
                    expiring_soon=expiring_soon,
                )
            )
        return rows
