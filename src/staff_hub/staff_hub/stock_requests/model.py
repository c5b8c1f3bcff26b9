from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import StockRequestStatus

NEXT_STATUS: dict[StockRequestStatus, StockRequestStatus] = {
    StockRequestStatus.REQUESTED: StockRequestStatus.ORDERED,
    StockRequestStatus.ORDERED: StockRequestStatus.DELIVERED,
}


@dataclass(frozen=True)
class StockRequest:
    id: str
    item_name: str
    experience: str
    quantity: int
    notes: str
    submitter_name: str
    status: StockRequestStatus
    created_timestamp: int
    delivered_timestamp: Optional[int] = None

    @property
    def next_status(self) -> Optional[StockRequestStatus]:
        return NEXT_STATUS.get(self.status)
