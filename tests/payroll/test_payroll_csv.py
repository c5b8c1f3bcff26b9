from __future__ import annotations

from datetime import date, datetime

import pytest

from src.staff_hub.staff_hub.common.datetime_utils import date_time_to_timestamp, date_to_timestamp
from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.constants import PAYROLL_CSV_HEADERS
from src.staff_hub.staff_hub.core.enums import HolidayRequestStatus, PayrollPeriod, Role, ShiftCategory
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, ValidationError
from src.staff_hub.staff_hub.employees.model import Employee
from src.staff_hub.staff_hub.employees.service import EmployeeService
from src.staff_hub.staff_hub.holidays.model import HolidayRequest
from src.staff_hub.staff_hub.holidays.service import HolidayService
from src.staff_hub.staff_hub.payroll.csv_export import parse_payroll_csv, payroll_csv_filename, render_payroll_csv
from src.staff_hub.staff_hub.payroll.service import PayrollReport, PayrollReportService, PayrollRow
from src.staff_hub.staff_hub.shifts.model import Shift
from src.staff_hub.staff_hub.shifts.service import ShiftService


class ListRepo:
    """Read-only repository over a fixed list."""

    def __init__(self, items):
        self.items = list(items)

    def list_all(self):
        return list(self.items)


def _employee(employee_id: str, name: str) -> Employee:
    return Employee(
        id=employee_id,
        full_name=name,
        job_title="",
        department="",
        email=f"{employee_id}@example.com",
        phone="",
        start_date=date_to_timestamp("2023-01-01"),
        is_active=True,
        role=Role.EMPLOYEE,
        account_level=Role.EMPLOYEE,
    )


def _shift(shift_id, day, start, end, employees, category=ShiftCategory.WORKED) -> Shift:
    return Shift(
        id=shift_id,
        date=date_to_timestamp(day),
        start_time=date_time_to_timestamp(day, start),
        end_time=date_time_to_timestamp(day, end),
        department="Bar",
        assigned_employees=tuple(employees),
        category=category,
    )


@pytest.fixture
def payroll() -> PayrollReportService:
    cache = QueryCache(stale_seconds=30)
    employees = ListRepo([_employee("E1", "Alice Smith"), _employee("E2", 'Bob "Bobby" Jones')])
    shifts = ListRepo(
        [
            _shift("s1", "2024-01-04", "09:00", "17:00", ["E1", "E2"]),
            _shift("s2", "2024-01-05", "09:00", "12:20", ["E1"], ShiftCategory.PAID_LEAVE),
            _shift("s3", "2024-01-06", "10:00", "14:00", ["E2"], ShiftCategory.SICKNESS),
        ]
    )
    holidays = ListRepo(
        [
            HolidayRequest(
                id="h1",
                employee_id="E2",
                start_date=date_to_timestamp("2024-01-08"),
                end_date=date_to_timestamp("2024-01-09"),
                status=HolidayRequestStatus.APPROVED,
                created_at=date_to_timestamp("2024-01-01"),
            )
        ]
    )
    return PayrollReportService(
        EmployeeService(employees, cache),
        ShiftService(shifts, cache),
        HolidayService(holidays, cache),
    )


def test_filename_uses_iso_dates():
    assert payroll_csv_filename(datetime(2024, 1, 4), datetime(2024, 1, 10, 23, 59)) == "payroll-2024-01-04-to-2024-01-10.csv"


def test_every_value_is_quoted_and_rows_are_newline_joined():
    report = PayrollReport(
        start=datetime(2024, 1, 4),
        end=datetime(2024, 1, 10),
        rows=(PayrollRow(employee_id="E1", employee_name="Alice", worked_hours=7.5, holiday_days=2),),
    )

    text = render_payroll_csv(report)

    assert text.split("\n") == [
        '"Employee Name","Worked Hours","Paid Leave Hours","Unpaid Leave Hours","Sickness Hours","Holiday Days"',
        '"Alice","7.50","0.00","0.00","0.00","2"',
    ]
    assert not text.endswith("\n")


def test_export_round_trips_through_a_csv_parser(payroll):
    filename, text = payroll.export_csv(current_role=Role.ADMIN, period=PayrollPeriod.CURRENT_WEEK, today=date(2024, 1, 8))

    assert filename == "payroll-2024-01-04-to-2024-01-10.csv"
    rows = parse_payroll_csv(text)
    assert list(rows[0].keys()) == list(PAYROLL_CSV_HEADERS)
    assert rows == [
        {
            "Employee Name": "Alice Smith",
            "Worked Hours": "8.00",
            "Paid Leave Hours": "3.33",
            "Unpaid Leave Hours": "0.00",
            "Sickness Hours": "0.00",
            "Holiday Days": "0",
        },
        {
            "Employee Name": 'Bob "Bobby" Jones',
            "Worked Hours": "8.00",
            "Paid Leave Hours": "0.00",
            "Unpaid Leave Hours": "0.00",
            "Sickness Hours": "4.00",
            "Holiday Days": "2",
        },
    ]


def test_report_keeps_unrounded_hours(payroll):
    report = payroll.build_report(current_role=Role.ADMIN, period=PayrollPeriod.CURRENT_WEEK, today=date(2024, 1, 8))

    assert report.rows[0].paid_leave_hours == pytest.approx(3 + 20 / 60)


def test_custom_period_without_dates_is_rejected_before_export(payroll):
    with pytest.raises(ValidationError, match="Please select a custom date range"):
        payroll.export_csv(current_role=Role.ADMIN, period=PayrollPeriod.CUSTOM, today=date(2024, 1, 8))


def test_only_admins_can_export(payroll):
    with pytest.raises(AuthorizationError):
        payroll.export_csv(current_role=Role.MANAGER, period=PayrollPeriod.CURRENT_WEEK, today=date(2024, 1, 8))
