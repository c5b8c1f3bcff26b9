from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest

from src.staff_hub.staff_hub.common.datetime_utils import date_time_to_timestamp, date_to_timestamp, get_week_dates
from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.enums import Role, ShiftCategory
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.staff_hub.staff_hub.shifts.model import Shift, ShiftNote
from src.staff_hub.staff_hub.shifts.rota import group_shifts_by_day
from src.staff_hub.staff_hub.shifts.service import ShiftService


def make_shift(shift_id: str, day: str, start: str, end: str, *, employees=("E1",), department="Bar", category=ShiftCategory.WORKED):
    return Shift(
        id=shift_id,
        date=date_to_timestamp(day),
        start_time=date_time_to_timestamp(day, start),
        end_time=date_time_to_timestamp(day, end),
        department=department,
        assigned_employees=tuple(employees),
        category=category,
    )


class InMemoryShifts:
    def __init__(self, shifts=()):
        self.shifts: dict[str, Shift] = {s.id: s for s in shifts}
        self.notes: list[ShiftNote] = []
        self.list_calls = 0

    def list_all(self):
        self.list_calls += 1
        return list(self.shifts.values())

    def list_for_employee(self, employee_id: str):
        return [s for s in self.shifts.values() if employee_id in s.assigned_employees]

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        return self.shifts.get(shift_id)

    def add(self, shift: Shift) -> None:
        self.shifts[shift.id] = shift

    def replace(self, shift: Shift) -> bool:
        if shift.id not in self.shifts:
            return False
        self.shifts[shift.id] = shift
        return True

    def delete(self, shift_id: str) -> bool:
        return self.shifts.pop(shift_id, None) is not None

    def add_note(self, note: ShiftNote) -> None:
        self.notes.append(note)

    def list_notes(self, shift_id: str):
        return [n for n in self.notes if n.shift_id == shift_id]


def counter_ids():
    n = iter(range(1, 1000))
    return lambda: f"id-{next(n)}"


def test_shifts_land_on_their_day_sorted_by_start():
    week = get_week_dates(date(2024, 1, 8))
    shifts = [
        make_shift("late", "2024-01-05", "18:00", "23:00"),
        make_shift("early", "2024-01-05", "09:00", "17:00"),
        make_shift("wed", "2024-01-10", "10:00", "14:00"),
        make_shift("next-week", "2024-01-11", "10:00", "14:00"),
        make_shift("last-week", "2024-01-03", "10:00", "14:00"),
    ]

    rota = group_shifts_by_day(week, shifts)

    assert [d.day for d in rota] == week
    assert [s.id for s in rota[1].shifts] == ["early", "late"]
    assert [s.id for s in rota[6].shifts] == ["wed"]
    assert sum(len(d.shifts) for d in rota) == 3


def test_equal_start_times_keep_input_order():
    week = get_week_dates(date(2024, 1, 4))
    a = make_shift("a", "2024-01-04", "09:00", "12:00")
    b = make_shift("b", "2024-01-04", "09:00", "17:00")

    assert [s.id for s in group_shifts_by_day(week, [a, b])[0].shifts] == ["a", "b"]
    assert [s.id for s in group_shifts_by_day(week, [b, a])[0].shifts] == ["b", "a"]


def test_grouping_is_idempotent():
    week = get_week_dates(date(2024, 1, 4))
    shifts = [make_shift("a", "2024-01-06", "12:00", "16:00"), make_shift("b", "2024-01-04", "08:00", "16:00")]

    first = group_shifts_by_day(week, shifts)
    again = group_shifts_by_day(week, [s for d in first for s in d.shifts])

    assert first == again


def test_undecodable_shift_dates_are_left_out():
    week = get_week_dates(date(2024, 1, 4))
    broken = Shift(id="x", date="bad", start_time=0, end_time=0, department="Bar", assigned_employees=("E1",))

    rota = group_shifts_by_day(week, [broken, make_shift("ok", "2024-01-04", "09:00", "10:00")])

    assert [s.id for d in rota for s in d.shifts] == ["ok"]


def test_weekly_rota_can_be_limited_to_one_employee():
    repo = InMemoryShifts(
        [
            make_shift("s1", "2024-01-04", "09:00", "17:00", employees=("E1", "E2")),
            make_shift("s2", "2024-01-05", "09:00", "17:00", employees=("E2",)),
        ]
    )
    service = ShiftService(repo, QueryCache(stale_seconds=30))

    everyone = service.weekly_rota(date(2024, 1, 6))
    mine = service.weekly_rota(date(2024, 1, 6), employee_id="E1")

    assert sum(len(d.shifts) for d in everyone) == 2
    assert [s.id for d in mine for s in d.shifts] == ["s1"]


def test_add_validates_and_invalidates_the_cached_list():
    repo = InMemoryShifts()
    service = ShiftService(repo, QueryCache(stale_seconds=30), id_factory=counter_ids())
    assert service.list_all() == []

    shift_id = service.add(
        current_role=Role.MANAGER,
        date=date_to_timestamp("2024-01-04"),
        start_time=date_time_to_timestamp("2024-01-04", "09:00"),
        end_time=date_time_to_timestamp("2024-01-04", "17:00"),
        department=" Escape Rooms ",
        assigned_employees=["E1"],
        category=ShiftCategory.PAID_LEAVE,
    )

    assert shift_id == "id-1"
    assert [s.department for s in service.list_all()] == ["Escape Rooms"]
    assert repo.list_calls == 2


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"department": "  "}, "Department is required"),
        ({"end": "08:00"}, "End time cannot be before Start time"),
        ({"employees": []}, "Assign at least one employee"),
        ({"employees": ["E1", "E1"]}, "An employee is assigned twice"),
    ],
)
def test_add_rejects_invalid_shifts(overrides, message):
    service = ShiftService(InMemoryShifts(), QueryCache(stale_seconds=30))

    with pytest.raises(ValidationError, match=message):
        service.add(
            current_role=Role.ADMIN,
            date=date_to_timestamp("2024-01-04"),
            start_time=date_time_to_timestamp("2024-01-04", "09:00"),
            end_time=date_time_to_timestamp("2024-01-04", overrides.get("end", "17:00")),
            department=overrides.get("department", "Bar"),
            assigned_employees=overrides.get("employees", ["E1"]),
        )


def test_employees_cannot_edit_the_rota():
    repo = InMemoryShifts([make_shift("s1", "2024-01-04", "09:00", "17:00")])
    service = ShiftService(repo, QueryCache(stale_seconds=30))

    with pytest.raises(AuthorizationError):
        service.delete(current_role=Role.EMPLOYEE, shift_id="s1")
    with pytest.raises(AuthorizationError):
        service.update(current_role=Role.EMPLOYEE, shift=repo.shifts["s1"])


def test_update_and_delete_unknown_shift():
    service = ShiftService(InMemoryShifts(), QueryCache(stale_seconds=30))

    with pytest.raises(NotFoundError):
        service.update(current_role=Role.ADMIN, shift=make_shift("ghost", "2024-01-04", "09:00", "17:00"))
    with pytest.raises(NotFoundError):
        service.delete(current_role=Role.ADMIN, shift_id="ghost")


def test_shift_notes():
    repo = InMemoryShifts([make_shift("s1", "2024-01-04", "09:00", "17:00")])
    service = ShiftService(repo, QueryCache(stale_seconds=30), id_factory=counter_ids())

    service.add_note(shift_id="s1", note_text="Cover the bar until 10", employee_id="E1")

    notes = service.list_notes("s1")
    assert [n.note_text for n in notes] == ["Cover the bar until 10"]
    assert notes[0].created_timestamp > date_to_timestamp("2024-01-01")

    with pytest.raises(NotFoundError):
        service.add_note(shift_id="ghost", note_text="hello")
    with pytest.raises(ValidationError):
        service.add_note(shift_id="s1", note_text=" ")
