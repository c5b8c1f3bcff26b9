from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import TRAINING_TITLE_SEPARATOR
from ..core.enums import TrainingStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class TrainingRecord:
    id: str
    employee_id: str
    title: str
    description: str
    status: TrainingStatus
    completion_date: Optional[int] = None
    expiry_date: Optional[int] = None

    @property
    def experience(self) -> Optional[str]:
        """Trailing part of a "Role - Experience" title, if the title has one."""
        parts = self.title.split(TRAINING_TITLE_SEPARATOR)
        if len(parts) < 2:
            return None
        return parts[-1].strip() or None


@dataclass(frozen=True)
class TrainingSummaryRow:
    employee: Employee
    experiences: tuple[str, ...]
    expired: int = 0
    expiring_soon: int = 0
