from __future__ import annotations

from abc import ABC, abstractmethod

from ...shifts.model import Shift


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def shift_hours(self, shift: Shift) -> float:
        raise NotImplementedError
