from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Nomination, NominationWinner


class NominationRepository(Protocol):
    def list_for_month(self, month: str) -> Sequence[Nomination]:
        raise NotImplementedError

    def add(self, nomination: Nomination) -> None:
        raise NotImplementedError

    def get_winner(self, month: str) -> Optional[NominationWinner]:
        raise NotImplementedError

    def add_winner(self, winner: NominationWinner) -> bool:
        """Record the month's winner; False if one is already recorded."""

        raise NotImplementedError

    def mark_bonus(self, month: str) -> bool:
        raise NotImplementedError
