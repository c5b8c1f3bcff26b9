from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StockRequest


class StockRequestRepository(Protocol):
    def list_all(self) -> Sequence[StockRequest]:
        raise NotImplementedError

    def get_by_id(self, request_id: str) -> Optional[StockRequest]:
        raise NotImplementedError

    def add(self, request: StockRequest) -> None:
        raise NotImplementedError

    def replace(self, request: StockRequest) -> bool:
        raise NotImplementedError
