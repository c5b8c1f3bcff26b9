from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import InventoryItem


class InventoryRepository(Protocol):
    def list_all(self) -> Sequence[InventoryItem]:
        raise NotImplementedError

    def get_by_id(self, item_id: str) -> Optional[InventoryItem]:
        raise NotImplementedError

    def add(self, item: InventoryItem) -> None:
        raise NotImplementedError

    def replace(self, item: InventoryItem) -> bool:
        raise NotImplementedError
