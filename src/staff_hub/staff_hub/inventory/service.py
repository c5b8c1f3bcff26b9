from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import datetime_to_ns, expiry_status, now_local, optional_date_to_timestamp
from ..common.ids import new_record_id
from ..common.query_cache import QueryCache
from ..common.validators import optional_text, require_non_empty
from ..core.constants import INVENTORY_LOCATIONS
from ..core.enums import InventoryOrderStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import InventoryItem, InventoryLine
from .repository import InventoryRepository

logger = logging.getLogger(__name__)

_STOCK_MANAGER_ROLES = {Role.ADMIN, Role.MANAGER}


def _require_location(location: str) -> str:
    location = require_non_empty(location, "Location")
    if location not in INVENTORY_LOCATIONS:
        raise ValidationError(f"Unknown location: {location}")
    return location


def _require_count(value: int, field_name: str) -> int:
    if int(value) < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return int(value)


def _validated(item: InventoryItem) -> InventoryItem:
    return replace(
        item,
        name=require_non_empty(item.name, "Item name"),
        location=_require_location(item.location),
        category=require_non_empty(item.category, "Category"),
        current_stock_count=_require_count(item.current_stock_count, "Stock count"),
        minimum_stock_level=_require_count(item.minimum_stock_level, "Minimum stock level"),
    )


class InventoryService:
    def __init__(
        self,
        items: InventoryRepository,
        cache: QueryCache,
        *,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self._items = items
        self._cache = cache
        self._new_id = id_factory

    def list_all(self) -> list[InventoryItem]:
        return list(self._cache.get_or_fetch(("inventory",), self._items.list_all))

    def get(self, item_id: str) -> InventoryItem:
        item = self._items.get_by_id(item_id)
        if not item:
            raise NotFoundError("Inventory item not found")
        return item

    def categories(self, location: str) -> list[str]:
        location = _require_location(location)
        return sorted({i.category for i in self.list_all() if i.location == location})

    def lines(
        self,
        *,
        location: Optional[str] = None,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[InventoryLine]:
        if location:
            location = _require_location(location)
        now = now or now_local()
        return [
            InventoryLine(item=i, expiry=expiry_status(i.expiry_date, now=now))
            for i in self.list_all()
            if (not location or i.location == location) and (not category or i.category == category)
        ]

    def needing_attention(self, *, location: Optional[str] = None, now: Optional[datetime] = None) -> list[InventoryLine]:
        """Low, expired, soon-to-expire, or flagged for ordering."""
        return [line for line in self.lines(location=location, now=now) if line.needs_attention]

    def add(
        self,
        *,
        current_role: Role,
        name: str,
        location: str,
        category: str,
        supplier: str = "",
        order_frequency: str = "",
        current_stock_count: int = 0,
        minimum_stock_level: int = 0,
        order_status: InventoryOrderStatus = InventoryOrderStatus.OK,
        expiry_date: Optional[str] = None,
        expected_delivery_date: Optional[str] = None,
        price: Optional[float] = None,
        size: Optional[str] = None,
    ) -> str:
        if current_role not in _STOCK_MANAGER_ROLES:
            raise AuthorizationError("Only managers can manage inventory")

        item = _validated(
            InventoryItem(
                id=self._new_id(),
                name=name,
                location=location,
                category=category,
                supplier=(supplier or "").strip(),
                order_frequency=(order_frequency or "").strip(),
                current_stock_count=current_stock_count,
                minimum_stock_level=minimum_stock_level,
                order_status=order_status,
                expiry_date=optional_date_to_timestamp(expiry_date),
                expected_delivery_date=optional_date_to_timestamp(expected_delivery_date),
                price=price,
                size=optional_text(size),
            )
        )
        self._items.add(item)
        self._cache.invalidate("inventory")
        logger.info("Added inventory item %s (%s @ %s)", item.id, item.name, item.location)
        return item.id

    def update(self, *, current_role: Role, item: InventoryItem) -> None:
        if current_role not in _STOCK_MANAGER_ROLES:
            raise AuthorizationError("Only managers can manage inventory")

        if not self._items.replace(_validated(item)):
            raise NotFoundError("Inventory item not found")
        self._cache.invalidate("inventory")
        logger.info("Updated inventory item %s", item.id)

    def record_stocktake(
        self,
        *,
        current_role: Role,
        item_id: str,
        count: int,
        checked_by: str,
        now: Optional[datetime] = None,
    ) -> InventoryItem:
        if current_role not in _STOCK_MANAGER_ROLES:
            raise AuthorizationError("Only managers can record a stocktake")

        item = self.get(item_id)
        updated = replace(
            item,
            current_stock_count=_require_count(count, "Stock count"),
            last_stocktake_date=datetime_to_ns(now or now_local()),
            last_stocktake_by=require_non_empty(checked_by, "Checked by"),
        )
        self.update(current_role=current_role, item=updated)
        if updated.is_low_stock:
            logger.warning("%s at %s is at or below its minimum (%d)", item.name, item.location, updated.current_stock_count)
        return updated
