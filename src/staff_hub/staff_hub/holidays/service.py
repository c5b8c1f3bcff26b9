from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import date_to_timestamp, datetime_to_ns, days_between, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import optional_text, require_non_empty, require_ordered
from ..core.enums import HolidayRequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import HolidayRequest, HolidayStatistics
from .repository import HolidayRequestRepository

logger = logging.getLogger(__name__)


def request_days(request: HolidayRequest) -> int:
    """Inclusive number of calendar days a request covers."""
    return days_between(request.start_date, request.end_date) + 1


class HolidayService:
    def __init__(
        self,
        requests: HolidayRequestRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._requests = requests
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[HolidayRequest]:
        return list(self._cache.get_or_fetch(("holidayRequests",), self._requests.list_all))

    def list_for_employee(self, employee_id: str) -> list[HolidayRequest]:
        return list(
            self._cache.get_or_fetch(
                ("holidayRequests", "employee", employee_id),
                lambda: self._requests.list_for_employee(employee_id),
            )
        )

    def list_by_status(self, status: HolidayRequestStatus) -> list[HolidayRequest]:
        return [r for r in self.list_all() if r.status == status]

    def submit(
        self,
        *,
        employee_id: str,
        start_date: str,
        end_date: str,
        reason: Optional[str] = None,
    ) -> str:
        employee_id = require_non_empty(employee_id, "Employee")
        start_ns = date_to_timestamp(start_date)
        end_ns = date_to_timestamp(end_date)
        require_ordered(start_ns, end_ns, start_name="Start date", end_name="End date")

        request = HolidayRequest(
            id=self._new_id(),
            employee_id=employee_id,
            start_date=start_ns,
            end_date=end_ns,
            status=HolidayRequestStatus.PENDING,
            created_at=datetime_to_ns(now_local()),
            reason=optional_text(reason),
        )
        self._requests.add(request)
        self._cache.invalidate("holidayRequests")
        logger.info("Holiday request %s submitted by %s", request.id, employee_id)
        return request.id

    def _decide(self, *, current_role: Role, request_id: str, status: HolidayRequestStatus) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        request = self._requests.get_by_id(request_id)
        if not request:
            raise NotFoundError("Holiday request not found")
        if request.status != HolidayRequestStatus.PENDING:
            raise ValidationError("Request has already been decided")

        if not self._requests.decide(request_id=request_id, status=status):
            raise ValidationError("Request has already been decided")
        self._cache.invalidate("holidayRequests")
        logger.info("Holiday request %s %s", request_id, status.value)

    def approve(self, *, current_role: Role, request_id: str) -> None:
        self._decide(current_role=current_role, request_id=request_id, status=HolidayRequestStatus.APPROVED)

    def decline(self, *, current_role: Role, request_id: str) -> None:
        self._decide(current_role=current_role, request_id=request_id, status=HolidayRequestStatus.DECLINED)

    def statistics(self) -> HolidayStatistics:
        requests = self.list_all()
        approved = [r for r in requests if r.status == HolidayRequestStatus.APPROVED]
        return HolidayStatistics(
            pending=sum(1 for r in requests if r.status == HolidayRequestStatus.PENDING),
            approved=len(approved),
            declined=sum(1 for r in requests if r.status == HolidayRequestStatus.DECLINED),
            total_approved_days=sum(request_days(r) for r in approved),
        )
