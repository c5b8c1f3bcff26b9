from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import end_of_day, get_week_dates, parse_iso_date, start_of_day, try_ns_to_datetime, week_range
from ..core.enums import HolidayRequestStatus, PayrollPeriod, Role, ShiftCategory
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.model import Employee
from ..employees.service import EmployeeService
from ..holidays.model import HolidayRequest
from ..holidays.service import HolidayService
from ..shifts.model import Shift
from ..shifts.service import ShiftService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .csv_export import payroll_csv_filename, render_payroll_csv

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class PayrollRow:
    employee_id: str
    employee_name: str
    worked_hours: float = 0.0
    paid_leave_hours: float = 0.0
    unpaid_leave_hours: float = 0.0
    sickness_hours: float = 0.0
    holiday_days: int = 0


@dataclass(frozen=True)
class PayrollReport:
    start: datetime
    end: datetime
    rows: tuple[PayrollRow, ...]
    skipped_records: int = 0


_CATEGORY_FIELD = {
    ShiftCategory.WORKED: "worked_hours",
    ShiftCategory.PAID_LEAVE: "paid_leave_hours",
    ShiftCategory.UNPAID_LEAVE: "unpaid_leave_hours",
    ShiftCategory.SICKNESS: "sickness_hours",
}


def resolve_period(
    period: PayrollPeriod,
    *,
    today: date,
    custom_start: Optional[str] = None,
    custom_end: Optional[str] = None,
) -> tuple[datetime, datetime]:
    """Date range for an export; the end is always normalised to 23:59:59.999."""

    if period == PayrollPeriod.CURRENT_WEEK:
        return week_range(today)

    if period == PayrollPeriod.TWO_WEEK:
        week = get_week_dates(today)
        return week[0] - timedelta(days=7), end_of_day(week[-1])

    if not custom_start or not custom_end:
        raise ValidationError("Please select a custom date range")
    start = start_of_day(parse_iso_date(custom_start))
    end = end_of_day(parse_iso_date(custom_end))
    if start > end:
        raise ValidationError("End date cannot be before start date")
    return start, end


def holiday_overlap_days(
    req_start: datetime,
    req_end: datetime,
    start: datetime,
    end: datetime,
) -> int:
    if req_end < start or req_start > end:
        return 0
    return math.ceil((min(req_end, end) - max(req_start, start)) / _ONE_DAY) + 1


def aggregate_payroll(
    *,
    start: datetime,
    end: datetime,
    shifts: Iterable[Shift],
    holiday_requests: Iterable[HolidayRequest],
    roster: Sequence[Employee],
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollReport:
    """Per-employee hours and holiday days for ``[start, end]``.

    A shift counts in full for each assigned employee when its date falls in
    the range; its category decides the column. Approved holiday requests add
    their overlapping days. Every roster employee gets a row, in roster order.
    Records with timestamps that cannot be decoded are skipped and counted.
    """

    calculator = calculator or StandardPayrollCalculator()
    totals: dict[str, dict] = {
        e.id: {
            "employee_name": e.full_name,
            "worked_hours": 0.0,
            "paid_leave_hours": 0.0,
            "unpaid_leave_hours": 0.0,
            "sickness_hours": 0.0,
            "holiday_days": 0,
        }
        for e in roster
    }
    skipped = 0

    for shift in shifts:
        shift_day = try_ns_to_datetime(shift.date)
        if shift_day is None or try_ns_to_datetime(shift.start_time) is None or try_ns_to_datetime(shift.end_time) is None:
            skipped += 1
            continue
        if shift_day < start or shift_day > end:
            continue

        hours = calculator.shift_hours(shift)
        field = _CATEGORY_FIELD[shift.category]
        for employee_id in shift.assigned_employees:
            t = totals.get(employee_id)
            if t is not None:
                t[field] += hours

    for req in holiday_requests:
        if req.status != HolidayRequestStatus.APPROVED:
            continue
        req_start = try_ns_to_datetime(req.start_date)
        req_end = try_ns_to_datetime(req.end_date)
        if req_start is None or req_end is None:
            skipped += 1
            continue

        t = totals.get(req.employee_id)
        if t is not None:
            t["holiday_days"] += holiday_overlap_days(req_start, req_end, start, end)

    if skipped:
        logger.warning("Payroll %s..%s skipped %d unparseable record(s)", start.date(), end.date(), skipped)

    rows = tuple(PayrollRow(employee_id=employee_id, **t) for employee_id, t in totals.items())
    return PayrollReport(start=start, end=end, rows=rows, skipped_records=skipped)


class PayrollReportService:
    def __init__(
        self,
        employees: EmployeeService,
        shifts: ShiftService,
        holidays: HolidayService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._shifts = shifts
        self._holidays = holidays
        self._calculator = calculator or StandardPayrollCalculator()

    def build_report(
        self,
        *,
        current_role: Role,
        period: PayrollPeriod,
        today: date,
        custom_start: Optional[str] = None,
        custom_end: Optional[str] = None,
    ) -> PayrollReport:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        start, end = resolve_period(period, today=today, custom_start=custom_start, custom_end=custom_end)
        return aggregate_payroll(
            start=start,
            end=end,
            shifts=self._shifts.list_all(),
            holiday_requests=self._holidays.list_all(),
            roster=self._employees.list_all(),
            calculator=self._calculator,
        )

    def export_csv(
        self,
        *,
        current_role: Role,
        period: PayrollPeriod,
        today: date,
        custom_start: Optional[str] = None,
        custom_end: Optional[str] = None,
    ) -> tuple[str, str]:
        """Returns ``(filename, csv_text)``."""

        report = self.build_report(
            current_role=current_role,
            period=period,
            today=today,
            custom_start=custom_start,
            custom_end=custom_end,
        )
        logger.info("Payroll export %s..%s (%d rows)", report.start.date(), report.end.date(), len(report.rows))
        return payroll_csv_filename(report.start, report.end), render_payroll_csv(report)
