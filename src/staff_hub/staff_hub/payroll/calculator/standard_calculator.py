from __future__ import annotations

from .base import PayrollCalculator
from ...shifts.model import Shift


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: end - start in hours, not below 0, unrounded."""

    def shift_hours(self, shift: Shift) -> float:
        return max(shift.duration_hours, 0.0)
