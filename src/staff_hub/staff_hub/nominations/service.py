from __future__ import annotations

import logging
import re
from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import current_month, datetime_to_ns, now_local
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Nomination, NominationWinner, NomineeSummary
from .repository import NominationRepository

logger = logging.getLogger(__name__)

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def _require_month(month: str) -> str:
    month = (month or "").strip()
    if not _MONTH_RE.match(month):
        raise ValidationError(f"Invalid month (YYYY-MM): {month!r}")
    return month


def _require_admin(current_role: Role) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError("Admin access required")


def group_by_nominee(nominations: list[Nomination]) -> list[NomineeSummary]:
    """Most nominated first; ties keep first-nominated order."""

    grouped: dict[str, list[Nomination]] = defaultdict(list)
    for n in nominations:
        grouped[n.nominee].append(n)
    summaries = [NomineeSummary(nominee=k, nominations=tuple(v)) for k, v in grouped.items()]
    return sorted(summaries, key=lambda s: s.count, reverse=True)


class NominationService:
    def __init__(
        self,
        nominations: NominationRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._nominations = nominations
        self._cache = cache
        self._new_id = id_factory

    def list_for_month(self, month: str) -> list[Nomination]:
        month = _require_month(month)
        return list(
            self._cache.get_or_fetch(("nominations", month), lambda: self._nominations.list_for_month(month))
        )

    def by_month(self, month: str) -> list[NomineeSummary]:
        return group_by_nominee(self.list_for_month(month))

    def winner(self, month: str) -> Optional[NominationWinner]:
        month = _require_month(month)
        return self._cache.get_or_fetch(("nominationWinner", month), lambda: self._nominations.get_winner(month))

    def submit(
        self,
        *,
        nominator: str,
        nominee: str,
        reason: str,
        now: Optional[datetime] = None,
    ) -> str:
        nominator = require_non_empty(nominator, "Nominator")
        nominee = require_non_empty(nominee, "Nominee")
        if nominee == nominator:
            raise ValidationError("You cannot nominate yourself")

        now = now or now_local()
        nomination = Nomination(
            id=self._new_id(),
            month=current_month(now=now),
            nominee=nominee,
            nominator=nominator,
            reason=require_non_empty(reason, "Reason"),
            submitted_at=datetime_to_ns(now),
        )
        self._nominations.add(nomination)
        self._cache.invalidate("nominations", nomination.month)
        logger.info("Nomination %s for %s in %s", nomination.id, nominee, nomination.month)
        return nomination.id

    def set_winner(self, *, current_role: Role, month: str, employee_id: str) -> None:
        _require_admin(current_role)
        month = _require_month(month)

        winner = NominationWinner(month=month, employee_id=require_non_empty(employee_id, "Winner"))
        if not self._nominations.add_winner(winner):
            raise ValidationError(f"A winner is already set for {month}")
        self._cache.invalidate("nominationWinner", month)
        logger.info("Employee of the month %s: %s", month, winner.employee_id)

    def mark_bonus(self, *, current_role: Role, month: str) -> None:
        _require_admin(current_role)
        month = _require_month(month)

        winner = self._nominations.get_winner(month)
        if not winner:
            raise NotFoundError(f"No winner set for {month}")
        if winner.has_received_bonus:
            raise ValidationError("Bonus already marked as received")

        self._nominations.mark_bonus(month)
        self._cache.invalidate("nominationWinner", month)
        logger.info("Bonus marked for %s (%s)", month, winner.employee_id)
