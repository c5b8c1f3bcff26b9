from __future__ import annotations

from datetime import date, datetime

import pytest

from src.staff_hub.staff_hub.common.datetime_utils import date_time_to_timestamp, date_to_timestamp, end_of_day
from src.staff_hub.staff_hub.core.enums import HolidayRequestStatus, PayrollPeriod, Role, ShiftCategory
from src.staff_hub.staff_hub.core.exceptions import ValidationError
from src.staff_hub.staff_hub.employees.model import Employee
from src.staff_hub.staff_hub.holidays.model import HolidayRequest
from src.staff_hub.staff_hub.payroll.service import aggregate_payroll, holiday_overlap_days, resolve_period
from src.staff_hub.staff_hub.shifts.model import Shift


def employee(employee_id: str, name: str, *, active: bool = True) -> Employee:
    return Employee(
        id=employee_id,
        full_name=name,
        job_title="Host",
        department="Escape Rooms",
        email=f"{employee_id.lower()}@example.com",
        phone="",
        start_date=date_to_timestamp("2023-01-01"),
        is_active=active,
        role=Role.EMPLOYEE,
        account_level=Role.EMPLOYEE,
    )


def shift(shift_id, day, start, end, employees, category=ShiftCategory.WORKED, department="Bar") -> Shift:
    return Shift(
        id=shift_id,
        date=date_to_timestamp(day),
        start_time=date_time_to_timestamp(day, start),
        end_time=date_time_to_timestamp(day, end),
        department=department,
        assigned_employees=tuple(employees),
        category=category,
    )


def holiday(request_id, employee_id, start, end, status=HolidayRequestStatus.APPROVED) -> HolidayRequest:
    return HolidayRequest(
        id=request_id,
        employee_id=employee_id,
        start_date=date_to_timestamp(start),
        end_date=date_to_timestamp(end),
        status=status,
        created_at=date_to_timestamp("2024-01-01"),
    )


ROSTER = [employee("E1", "Alice"), employee("E2", "Bob"), employee("E3", "Cara", active=False)]
WEEK_START = datetime(2024, 1, 4)
WEEK_END = end_of_day(date(2024, 1, 10))


def totals(report) -> dict:
    return {r.employee_id: r for r in report.rows}


def test_empty_input_gives_one_zero_row_per_roster_employee():
    report = aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=[], holiday_requests=[], roster=ROSTER)

    assert [r.employee_name for r in report.rows] == ["Alice", "Bob", "Cara"]
    for row in report.rows:
        assert (row.worked_hours, row.paid_leave_hours, row.unpaid_leave_hours, row.sickness_hours) == (0, 0, 0, 0)
        assert row.holiday_days == 0
    assert report.skipped_records == 0


def test_sickness_shift_counts_only_as_sickness():
    sick = Shift.from_legacy(
        id="s1",
        date=date_to_timestamp("2024-01-05"),
        start_time=date_time_to_timestamp("2024-01-05", "09:00"),
        end_time=date_time_to_timestamp("2024-01-05", "17:00"),
        department="[SICKNESS] Bar",
        assigned_employees=["E1"],
    )

    row = totals(aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=[sick], holiday_requests=[], roster=ROSTER))["E1"]

    assert row.worked_hours == 0
    assert row.sickness_hours == 8
    assert row.paid_leave_hours == 0
    assert row.unpaid_leave_hours == 0


def test_each_category_lands_in_its_own_column_for_every_assignee():
    shifts = [
        shift("w", "2024-01-04", "09:00", "17:30", ["E1", "E2"]),
        shift("p", "2024-01-05", "09:00", "13:00", ["E1"], ShiftCategory.PAID_LEAVE),
        shift("u", "2024-01-06", "10:00", "12:00", ["E2"], ShiftCategory.UNPAID_LEAVE),
        shift("ghost", "2024-01-06", "10:00", "12:00", ["NOT-ON-ROSTER"]),
    ]

    rows = totals(aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=shifts, holiday_requests=[], roster=ROSTER))

    assert rows["E1"].worked_hours == 8.5
    assert rows["E1"].paid_leave_hours == 4
    assert rows["E2"].worked_hours == 8.5
    assert rows["E2"].unpaid_leave_hours == 2
    assert len(rows) == 3


def test_shifts_outside_the_range_are_ignored():
    shifts = [
        shift("before", "2024-01-03", "09:00", "17:00", ["E1"]),
        shift("first", "2024-01-04", "09:00", "17:00", ["E1"]),
        shift("last", "2024-01-10", "09:00", "17:00", ["E1"]),
        shift("after", "2024-01-11", "09:00", "17:00", ["E1"]),
    ]

    rows = totals(aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=shifts, holiday_requests=[], roster=ROSTER))

    assert rows["E1"].worked_hours == 16


def test_adjacent_ranges_add_up_to_the_union():
    shifts = [
        shift("a", "2024-01-04", "09:00", "17:15", ["E1", "E2"]),
        shift("b", "2024-01-07", "12:00", "20:00", ["E1"], ShiftCategory.SICKNESS),
        shift("c", "2024-01-08", "08:00", "09:40", ["E2"], ShiftCategory.PAID_LEAVE),
        shift("d", "2024-01-10", "18:00", "23:00", ["E1"], ShiftCategory.UNPAID_LEAVE),
    ]
    first = aggregate_payroll(start=WEEK_START, end=end_of_day(date(2024, 1, 7)), shifts=shifts, holiday_requests=[], roster=ROSTER)
    second = aggregate_payroll(start=datetime(2024, 1, 8), end=WEEK_END, shifts=shifts, holiday_requests=[], roster=ROSTER)
    union = aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=shifts, holiday_requests=[], roster=ROSTER)

    for a, b, u in zip(first.rows, second.rows, union.rows):
        assert a.worked_hours + b.worked_hours == pytest.approx(u.worked_hours)
        assert a.paid_leave_hours + b.paid_leave_hours == pytest.approx(u.paid_leave_hours)
        assert a.unpaid_leave_hours + b.unpaid_leave_hours == pytest.approx(u.unpaid_leave_hours)
        assert a.sickness_hours + b.sickness_hours == pytest.approx(u.sickness_hours)


def test_only_approved_holidays_count_and_only_the_overlap():
    requests = [
        holiday("h1", "E1", "2024-01-03", "2024-01-06"),
        holiday("h2", "E2", "2024-01-05", "2024-01-05"),
        holiday("h3", "E2", "2024-01-06", "2024-01-07", HolidayRequestStatus.PENDING),
        holiday("h4", "E2", "2024-01-06", "2024-01-07", HolidayRequestStatus.DECLINED),
        holiday("h5", "E1", "2023-12-01", "2023-12-05"),
    ]

    rows = totals(aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=[], holiday_requests=requests, roster=ROSTER))

    assert rows["E1"].holiday_days == 3
    assert rows["E2"].holiday_days == 1
    assert rows["E3"].holiday_days == 0


def test_holiday_overlap_days():
    assert holiday_overlap_days(datetime(2024, 1, 5), datetime(2024, 1, 5), WEEK_START, WEEK_END) == 1
    assert holiday_overlap_days(datetime(2024, 1, 1), datetime(2024, 1, 3), WEEK_START, WEEK_END) == 0
    assert holiday_overlap_days(datetime(2024, 1, 11), datetime(2024, 1, 12), WEEK_START, WEEK_END) == 0


def test_holiday_running_past_range_end_rounds_the_partial_day_up():
    # 2024-01-08 00:00 .. 2024-01-10 23:59:59.999 is just under three days; ceil gives 3, plus one.
    assert holiday_overlap_days(datetime(2024, 1, 8), datetime(2024, 1, 20), WEEK_START, WEEK_END) == 4

    request = holiday("h1", "E1", "2024-01-08", "2024-01-20")
    rows = totals(aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=[], holiday_requests=[request], roster=ROSTER))
    assert rows["E1"].holiday_days == 4


def test_undecodable_records_are_skipped_and_counted(caplog):
    broken_shift = Shift(id="bad", date="oops", start_time=0, end_time=0, department="Bar", assigned_employees=("E1",))
    broken_holiday = HolidayRequest(
        id="bad-h",
        employee_id="E1",
        start_date=None,
        end_date=None,
        status=HolidayRequestStatus.APPROVED,
        created_at=0,
    )
    good = shift("ok", "2024-01-04", "09:00", "10:00", ["E1"])

    with caplog.at_level("WARNING"):
        report = aggregate_payroll(
            start=WEEK_START,
            end=WEEK_END,
            shifts=[broken_shift, good],
            holiday_requests=[broken_holiday],
            roster=ROSTER,
        )

    assert report.skipped_records == 2
    assert totals(report)["E1"].worked_hours == 1
    assert "skipped 2" in caplog.text


def test_aggregation_is_pure():
    shifts = [shift("a", "2024-01-04", "09:00", "17:00", ["E1"])]

    first = aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=shifts, holiday_requests=[], roster=ROSTER)
    second = aggregate_payroll(start=WEEK_START, end=WEEK_END, shifts=shifts, holiday_requests=[], roster=ROSTER)

    assert first == second


def test_resolve_current_and_two_week_periods():
    today = date(2024, 1, 8)

    assert resolve_period(PayrollPeriod.CURRENT_WEEK, today=today) == (WEEK_START, WEEK_END)
    assert resolve_period(PayrollPeriod.TWO_WEEK, today=today) == (datetime(2023, 12, 28), WEEK_END)


def test_resolve_custom_period():
    start, end = resolve_period(PayrollPeriod.CUSTOM, today=date(2024, 1, 8), custom_start="2024-01-01", custom_end="2024-01-31")

    assert start == datetime(2024, 1, 1)
    assert end == datetime(2024, 1, 31, 23, 59, 59, 999000)


@pytest.mark.parametrize("custom_start, custom_end", [(None, "2024-01-31"), ("2024-01-01", ""), (None, None)])
def test_custom_period_needs_both_dates(custom_start, custom_end):
    with pytest.raises(ValidationError, match="Please select a custom date range"):
        resolve_period(PayrollPeriod.CUSTOM, today=date(2024, 1, 8), custom_start=custom_start, custom_end=custom_end)


def test_custom_period_must_be_ordered():
    with pytest.raises(ValidationError):
        resolve_period(PayrollPeriod.CUSTOM, today=date(2024, 1, 8), custom_start="2024-02-01", custom_end="2024-01-01")
