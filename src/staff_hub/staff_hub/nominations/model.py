from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Nomination:
    id: str
    month: str
    nominee: str
    nominator: str
    reason: str
    submitted_at: int


@dataclass(frozen=True)
class NominationWinner:
    month: str
    employee_id: str
    has_received_bonus: bool = False


@dataclass(frozen=True)
class NomineeSummary:
    nominee: str
    nominations: tuple[Nomination, ...]

    @property
    def count(self) -> int:
        return len(self.nominations)
