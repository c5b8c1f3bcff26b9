from src.staff_hub.staff_hub.common.datetime_utils import date_time_to_timestamp, date_to_timestamp
from src.staff_hub.staff_hub.core.enums import ShiftCategory
from src.staff_hub.staff_hub.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.staff_hub.staff_hub.shifts.model import Shift


def _shift(start: str, end: str) -> Shift:
    return Shift(
        id="s1",
        date=date_to_timestamp("2025-01-02"),
        start_time=date_time_to_timestamp("2025-01-02", start),
        end_time=date_time_to_timestamp("2025-01-02", end),
        department="Bar",
        assigned_employees=("E1",),
        category=ShiftCategory.WORKED,
    )


def test_standard_calculator_uses_end_minus_start():
    calc = StandardPayrollCalculator()
    assert calc.shift_hours(_shift("08:00", "17:00")) == 9.0


def test_standard_calculator_keeps_fractional_hours():
    calc = StandardPayrollCalculator()
    assert calc.shift_hours(_shift("09:00", "09:20")) == 20 / 60


def test_standard_calculator_never_goes_negative():
    calc = StandardPayrollCalculator()
    assert calc.shift_hours(_shift("17:00", "09:00")) == 0.0
