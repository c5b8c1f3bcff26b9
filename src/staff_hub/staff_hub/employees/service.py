from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from ..common.datetime_utils import date_to_timestamp
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


def _require_email(value: str) -> str:
    email = require_non_empty(value, "Email")
    if "@" not in email:
        raise ValidationError("Email is not valid")
    return email


class EmployeeService:
    def __init__(
        self,
        employees: EmployeeRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._employees = employees
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[Employee]:
        return list(self._cache.get_or_fetch(("employees",), self._employees.list_all))

    def list_active(self) -> list[Employee]:
        return [e for e in self.list_all() if e.is_active]

    def find(self, employee_id: str) -> Optional[Employee]:
        return self._cache.get_or_fetch(("employee", employee_id), lambda: self._employees.get_by_id(employee_id))

    def get(self, employee_id: str) -> Employee:
        employee = self.find(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def name_lookup(self) -> dict[str, str]:
        return {e.id: e.full_name for e in self.list_all()}

    def add(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        start_date: str,
        job_title: str = "",
        department: str = "",
        phone: str = "",
        role: Role = Role.EMPLOYEE,
    ) -> str:
        _require_admin(current_role)

        employee = Employee(
            id=self._new_id(),
            full_name=require_non_empty(full_name, "Full name"),
            job_title=(job_title or "").strip(),
            department=(department or "").strip(),
            email=_require_email(email),
            phone=(phone or "").strip(),
            start_date=date_to_timestamp(start_date),
            is_active=True,
            role=role,
            account_level=role,
        )
        self._employees.add(employee)
        self._cache.invalidate("employees")
        logger.info("Added employee %s (%s)", employee.id, employee.full_name)
        return employee.id

    def update(self, *, current_role: Role, employee: Employee) -> None:
        """Replace the whole record."""

        _require_admin(current_role)
        require_non_empty(employee.full_name, "Full name")
        _require_email(employee.email)

        if not self._employees.replace(employee):
            raise NotFoundError("Employee not found")
        self._cache.invalidate("employees")
        self._cache.invalidate("employee", employee.id)
        logger.info("Updated employee %s", employee.id)

    def deactivate(self, *, current_role: Role, employee_id: str) -> None:
        employee = self.get(employee_id)
        if not employee.is_active:
            raise ValidationError("Employee is already inactive")
        self.update(current_role=current_role, employee=replace(employee, is_active=False))
