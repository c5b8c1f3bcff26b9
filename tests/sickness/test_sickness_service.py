from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.staff_hub.staff_hub.common.datetime_utils import date_to_timestamp
from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.enums import Role
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.staff_hub.staff_hub.employees.model import Employee
from src.staff_hub.staff_hub.employees.service import EmployeeService
from src.staff_hub.staff_hub.sickness.model import SicknessRecord
from src.staff_hub.staff_hub.sickness.service import SicknessService


class InMemoryEmployees:
    def __init__(self, employees):
        self.employees = {e.id: e for e in employees}

    def list_all(self):
        return list(self.employees.values())

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self.employees.get(employee_id)


class InMemorySickness:
    def __init__(self):
        self.records: dict[str, SicknessRecord] = {}

    def list_for_employee(self, employee_id: str):
        return [r for r in self.records.values() if r.employee_id == employee_id]

    def get_by_id(self, record_id: str) -> Optional[SicknessRecord]:
        return self.records.get(record_id)

    def add(self, record: SicknessRecord) -> None:
        self.records[record.id] = record

    def replace(self, record: SicknessRecord) -> bool:
        if record.id not in self.records:
            return False
        self.records[record.id] = record
        return True


def _employee(employee_id: str) -> Employee:
    return Employee(
        id=employee_id,
        full_name=employee_id,
        job_title="",
        department="",
        email=f"{employee_id}@example.com",
        phone="",
        start_date=date_to_timestamp("2023-01-01"),
        is_active=True,
        role=Role.EMPLOYEE,
        account_level=Role.EMPLOYEE,
    )


@pytest.fixture
def repo() -> InMemorySickness:
    return InMemorySickness()


@pytest.fixture
def service(repo) -> SicknessService:
    cache = QueryCache(stale_seconds=30)
    employees = EmployeeService(InMemoryEmployees([_employee("E1"), _employee("E2")]), cache)
    ids = iter(f"s{i}" for i in range(1, 100))
    return SicknessService(repo, employees, cache, id_factory=lambda: next(ids))


def _add(service: SicknessService, start: str, end: str, **overrides) -> str:
    kwargs = dict(
        current_role=Role.MANAGER,
        employee_id="E1",
        absence_start_date=start,
        absence_end_date=end,
        reason="Flu",
    )
    kwargs.update(overrides)
    return service.add(**kwargs)


def test_history_is_newest_first_with_total_days(service):
    _add(service, "2024-01-02", "2024-01-05")
    _add(service, "2024-03-10", "2024-03-11")

    history = service.history("E1", current_role=Role.EMPLOYEE, viewer_id="E1")

    assert [r.id for r in history.records] == ["s2", "s1"]
    assert history.total_days == 3 + 1


def test_edit_updates_the_same_record(service, repo):
    record_id = _add(service, "2024-01-02", "2024-01-05")
    service.history("E1", current_role=Role.MANAGER, viewer_id="E2")

    service.update(
        current_role=Role.MANAGER,
        record=replace(repo.records[record_id], return_note="Back and well"),
    )

    assert list(repo.records) == [record_id]
    history = service.history("E1", current_role=Role.MANAGER, viewer_id="E2")
    assert history.records[0].return_note == "Back and well"


def test_edit_rejects_reversed_dates_and_moving_employee(service, repo):
    record_id = _add(service, "2024-01-02", "2024-01-05")
    record = repo.records[record_id]

    with pytest.raises(ValidationError):
        service.update(
            current_role=Role.MANAGER,
            record=replace(record, absence_end_date=date_to_timestamp("2024-01-01")),
        )
    with pytest.raises(ValidationError):
        service.update(current_role=Role.MANAGER, record=replace(record, employee_id="E2"))


def test_edit_unknown_record(service):
    ghost = SicknessRecord(id="ghost", employee_id="E1", absence_start_date=0, absence_end_date=0)

    with pytest.raises(NotFoundError):
        service.update(current_role=Role.ADMIN, record=ghost)


def test_add_requires_both_dates_and_a_manager(service):
    with pytest.raises(ValidationError):
        _add(service, "2024-01-02", "")
    with pytest.raises(AuthorizationError):
        _add(service, "2024-01-02", "2024-01-03", current_role=Role.EMPLOYEE)


def test_colleagues_cannot_read_each_others_sickness(service):
    with pytest.raises(AuthorizationError):
        service.history("E1", current_role=Role.EMPLOYEE, viewer_id="E2")
