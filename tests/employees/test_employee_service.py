from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.staff_hub.staff_hub.common.datetime_utils import timestamp_to_date_input
from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.enums import Role
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.staff_hub.staff_hub.employees.model import Employee
from src.staff_hub.staff_hub.employees.service import EmployeeService


class InMemoryEmployees:
    def __init__(self):
        self.employees: dict[str, Employee] = {}
        self.list_calls = 0

    def list_all(self):
        self.list_calls += 1
        return list(self.employees.values())

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def add(self, employee: Employee) -> None:
        self.employees[employee.id] = employee

    def replace(self, employee: Employee) -> bool:
        if employee.id not in self.employees:
            return False
        self.employees[employee.id] = employee
        return True


@pytest.fixture
def repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def service(repo) -> EmployeeService:
    ids = iter(f"E{i}" for i in range(1, 100))
    return EmployeeService(repo, QueryCache(stale_seconds=30), id_factory=lambda: next(ids))


def _add(service: EmployeeService, name: str = "Alice Smith", **overrides) -> str:
    kwargs = dict(
        current_role=Role.ADMIN,
        full_name=name,
        email="alice@example.com",
        start_date="2024-01-08",
        job_title="Host",
        department="Escape Rooms",
    )
    kwargs.update(overrides)
    return service.add(**kwargs)


def test_add_creates_an_active_employee(service):
    employee_id = _add(service, role=Role.MANAGER)

    employee = service.get(employee_id)
    assert employee.full_name == "Alice Smith"
    assert employee.is_active
    assert employee.role == Role.MANAGER
    assert employee.account_level == Role.MANAGER
    assert timestamp_to_date_input(employee.start_date) == "2024-01-08"


@pytest.mark.parametrize(
    "overrides",
    [
        {"full_name": " "},
        {"email": ""},
        {"email": "not-an-email"},
        {"start_date": "08/01/2024"},
    ],
)
def test_add_validates_input(service, overrides):
    with pytest.raises(ValidationError):
        _add(service, **overrides)


def test_only_admins_manage_employees(service):
    with pytest.raises(AuthorizationError):
        _add(service, current_role=Role.MANAGER)

    employee_id = _add(service)
    with pytest.raises(AuthorizationError):
        service.deactivate(current_role=Role.EMPLOYEE, employee_id=employee_id)


def test_update_replaces_the_record_and_refreshes_reads(service, repo):
    employee_id = _add(service)
    assert service.list_all()[0].job_title == "Host"

    service.update(current_role=Role.ADMIN, employee=replace(service.get(employee_id), job_title="Supervisor"))

    assert service.list_all()[0].job_title == "Supervisor"
    assert service.get(employee_id).job_title == "Supervisor"
    assert len(repo.employees) == 1


def test_update_unknown_employee(service):
    ghost = Employee(
        id="ghost",
        full_name="Ghost",
        job_title="",
        department="",
        email="ghost@example.com",
        phone="",
        start_date=0,
        is_active=True,
        role=Role.EMPLOYEE,
        account_level=Role.EMPLOYEE,
    )

    with pytest.raises(NotFoundError):
        service.update(current_role=Role.ADMIN, employee=ghost)


def test_deactivate_hides_from_active_list(service):
    first = _add(service)
    second = _add(service, name="Bob", email="bob@example.com")

    service.deactivate(current_role=Role.ADMIN, employee_id=first)

    assert [e.id for e in service.list_active()] == [second]
    assert len(service.list_all()) == 2
    with pytest.raises(ValidationError):
        service.deactivate(current_role=Role.ADMIN, employee_id=first)


def test_reads_are_served_from_cache(service, repo):
    _add(service)
    service.list_all()
    service.list_active()
    service.name_lookup()

    assert repo.list_calls == 1
