from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import HolidayRequestStatus
from .model import HolidayRequest


class HolidayRequestRepository(Protocol):
    def list_all(self) -> Sequence[HolidayRequest]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[HolidayRequest]:
        raise NotImplementedError

    def get_by_id(self, request_id: str) -> Optional[HolidayRequest]:
        raise NotImplementedError

    def add(self, request: HolidayRequest) -> None:
        raise NotImplementedError

    def decide(self, *, request_id: str, status: HolidayRequestStatus) -> bool:
        """Move a pending request to ``status``; False if it was not pending."""

        raise NotImplementedError
