from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ExpiryStatus, InventoryOrderStatus


@dataclass(frozen=True)
class InventoryItem:
    id: str
    name: str
    location: str
    category: str
    supplier: str = ""
    order_frequency: str = ""
    current_stock_count: int = 0
    minimum_stock_level: int = 0
    order_status: InventoryOrderStatus = InventoryOrderStatus.OK
    expiry_date: Optional[int] = None
    expected_delivery_date: Optional[int] = None
    last_stocktake_date: Optional[int] = None
    last_stocktake_by: Optional[str] = None
    price: Optional[float] = None
    size: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        """A minimum of 0 means the item is not tracked for low stock."""
        return self.minimum_stock_level > 0 and self.current_stock_count <= self.minimum_stock_level


@dataclass(frozen=True)
class InventoryLine:
    item: InventoryItem
    expiry: Optional[ExpiryStatus]

    @property
    def needs_attention(self) -> bool:
        return (
            self.item.is_low_stock
            or self.item.order_status == InventoryOrderStatus.ORDER_REQUIRED
            or self.expiry in (ExpiryStatus.EXPIRED, ExpiryStatus.EXPIRING_SOON)
        )
