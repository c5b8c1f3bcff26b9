from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import datetime_to_ns, now_local, try_ns_to_datetime
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty, require_positive
from ..core.constants import EXPERIENCE_OPTIONS, STOCK_ARCHIVE_AFTER_DAYS
from ..core.enums import Role, StockRequestStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import StockRequest
from .repository import StockRequestRepository

logger = logging.getLogger(__name__)

_STOCK_MANAGER_ROLES = {Role.ADMIN, Role.MANAGER}


def is_archive_due(request: StockRequest, now: datetime) -> bool:
    if request.status != StockRequestStatus.DELIVERED or request.delivered_timestamp is None:
        return False
    delivered = try_ns_to_datetime(request.delivered_timestamp)
    return delivered is not None and now - delivered > timedelta(days=STOCK_ARCHIVE_AFTER_DAYS)


class StockRequestService:
    def __init__(
        self,
        requests: StockRequestRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._requests = requests
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[StockRequest]:
        return list(self._cache.get_or_fetch(("stockRequests",), self._requests.list_all))

    def list_open(self) -> list[StockRequest]:
        return [r for r in self.list_all() if r.status != StockRequestStatus.ARCHIVED]

    def list_archived(self) -> list[StockRequest]:
        return [r for r in self.list_all() if r.status == StockRequestStatus.ARCHIVED]

    def submit(
        self,
        *,
        item_name: str,
        experience: str,
        quantity: int,
        submitter_name: str,
        notes: str = "",
    ) -> str:
        experience = require_non_empty(experience, "Experience")
        if experience not in EXPERIENCE_OPTIONS:
            raise ValidationError(f"Unknown experience: {experience}")

        request = StockRequest(
            id=self._new_id(),
            item_name=require_non_empty(item_name, "Item"),
            experience=experience,
            quantity=require_positive(quantity, "Quantity"),
            notes=(notes or "").strip(),
            submitter_name=require_non_empty(submitter_name, "Submitter"),
            status=StockRequestStatus.REQUESTED,
            created_timestamp=datetime_to_ns(now_local()),
        )
        self._requests.add(request)
        self._cache.invalidate("stockRequests")
        logger.info("Stock request %s submitted (%s x%d)", request.id, request.item_name, request.quantity)
        return request.id

    def advance(
        self,
        request_id: str,
        *,
        current_role: Role,
        now: Optional[datetime] = None,
    ) -> StockRequestStatus:
        """Move a request one step along requested -> ordered -> delivered.

        Archiving is left to :meth:`archive_due`.
        """

        if current_role not in _STOCK_MANAGER_ROLES:
            raise AuthorizationError("Only managers can update stock requests")

        request = self._requests.get_by_id(request_id)
        if not request:
            raise NotFoundError("Stock request not found")
        next_status = request.next_status
        if next_status is None:
            raise ValidationError(f"Stock request is already {request.status.value}")

        updated = replace(request, status=next_status)
        if next_status == StockRequestStatus.DELIVERED:
            updated = replace(updated, delivered_timestamp=datetime_to_ns(now or now_local()))

        if not self._requests.replace(updated):
            raise NotFoundError("Stock request not found")
        self._cache.invalidate("stockRequests")
        logger.info("Stock request %s moved to %s", request_id, next_status.value)
        return next_status

    def archive_due(self, *, now: Optional[datetime] = None) -> int:
        """Archive delivered requests older than the archive window; returns how many moved."""

        now = now or now_local()
        archived = 0
        for request in self._requests.list_all():
            if is_archive_due(request, now):
                if self._requests.replace(replace(request, status=StockRequestStatus.ARCHIVED)):
                    archived += 1

        if archived:
            self._cache.invalidate("stockRequests")
        logger.info("Archived %d delivered stock request(s)", archived)
        return archived
