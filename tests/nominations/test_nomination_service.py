from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.staff_hub.staff_hub.common.query_cache import QueryCache
from src.staff_hub.staff_hub.core.enums import Role
from src.staff_hub.staff_hub.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.staff_hub.staff_hub.nominations.model import Nomination, NominationWinner
from src.staff_hub.staff_hub.nominations.service import NominationService


class InMemoryNominations:
    def __init__(self):
        self.nominations: list[Nomination] = []
        self.winners: dict[str, NominationWinner] = {}

    def list_for_month(self, month: str):
        return [n for n in self.nominations if n.month == month]

    def add(self, nomination: Nomination) -> None:
        self.nominations.append(nomination)

    def get_winner(self, month: str) -> Optional[NominationWinner]:
        return self.winners.get(month)

    def add_winner(self, winner: NominationWinner) -> bool:
        if winner.month in self.winners:
            return False
        self.winners[winner.month] = winner
        return True

    def mark_bonus(self, month: str) -> bool:
        if month not in self.winners:
            return False
        self.winners[month] = replace(self.winners[month], has_received_bonus=True)
        return True


JAN = datetime(2024, 1, 20, 12, 0)


@pytest.fixture
def service() -> NominationService:
    ids = iter(f"n{i}" for i in range(1, 100))
    return NominationService(InMemoryNominations(), QueryCache(stale_seconds=30), id_factory=lambda: next(ids))


def test_by_month_groups_nominees_most_nominated_first(service):
    service.submit(nominator="E1", nominee="E2", reason="Covered my shift", now=JAN)
    service.submit(nominator="E2", nominee="E3", reason="Great with kids", now=JAN)
    service.submit(nominator="E4", nominee="E3", reason="Fixed the lock", now=JAN)
    service.submit(nominator="E1", nominee="E3", reason="Other month", now=datetime(2024, 2, 1))

    summaries = service.by_month("2024-01")

    assert [(s.nominee, s.count) for s in summaries] == [("E3", 2), ("E2", 1)]
    assert [n.reason for n in summaries[0].nominations] == ["Great with kids", "Fixed the lock"]
    assert [s.nominee for s in service.by_month("2024-02")] == ["E3"]


def test_reason_is_required_and_self_nomination_rejected(service):
    with pytest.raises(ValidationError):
        service.submit(nominator="E1", nominee="E2", reason="  ", now=JAN)
    with pytest.raises(ValidationError):
        service.submit(nominator="E1", nominee="E1", reason="I'm great", now=JAN)


def test_winner_is_set_once_and_bonus_marked_once(service):
    service.set_winner(current_role=Role.ADMIN, month="2024-01", employee_id="E3")

    with pytest.raises(ValidationError):
        service.set_winner(current_role=Role.ADMIN, month="2024-01", employee_id="E2")
    assert service.winner("2024-01") == NominationWinner(month="2024-01", employee_id="E3")

    service.mark_bonus(current_role=Role.ADMIN, month="2024-01")

    assert service.winner("2024-01").has_received_bonus
    with pytest.raises(ValidationError):
        service.mark_bonus(current_role=Role.ADMIN, month="2024-01")


def test_bonus_needs_a_winner(service):
    with pytest.raises(NotFoundError):
        service.mark_bonus(current_role=Role.ADMIN, month="2024-03")


def test_winner_management_is_admin_only(service):
    with pytest.raises(AuthorizationError):
        service.set_winner(current_role=Role.MANAGER, month="2024-01", employee_id="E3")
    with pytest.raises(AuthorizationError):
        service.mark_bonus(current_role=Role.EMPLOYEE, month="2024-01")


def test_month_format_is_checked(service):
    with pytest.raises(ValidationError):
        service.by_month("January")
    with pytest.raises(ValidationError):
        service.set_winner(current_role=Role.ADMIN, month="2024-13", employee_id="E3")
