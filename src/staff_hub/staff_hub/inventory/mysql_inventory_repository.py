from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import InventoryOrderStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import InventoryItem
from .repository import InventoryRepository

_COLUMNS = (
    "name, location, category, supplier, order_frequency, current_stock_count, minimum_stock_level, "
    "order_status, expiry_date, expected_delivery_date, last_stocktake_date, last_stocktake_by, price, size"
)

_SELECT = f"SELECT id, {_COLUMNS} FROM inventory_items"


def _row_to_item(r: dict) -> InventoryItem:
    return InventoryItem(
        id=str(r["id"]),
        name=r["name"],
        location=r["location"],
        category=r["category"],
        supplier=r.get("supplier") or "",
        order_frequency=r.get("order_frequency") or "",
        current_stock_count=int(r.get("current_stock_count") or 0),
        minimum_stock_level=int(r.get("minimum_stock_level") or 0),
        order_status=InventoryOrderStatus(r["order_status"]),
        expiry_date=optional_int(r.get("expiry_date")),
        expected_delivery_date=optional_int(r.get("expected_delivery_date")),
        last_stocktake_date=optional_int(r.get("last_stocktake_date")),
        last_stocktake_by=r.get("last_stocktake_by"),
        price=float(r["price"]) if r.get("price") is not None else None,
        size=r.get("size"),
    )


def _values(item: InventoryItem) -> tuple:
    return (
        item.name,
        item.location,
        item.category,
        item.supplier,
        item.order_frequency,
        item.current_stock_count,
        item.minimum_stock_level,
        item.order_status.value,
        item.expiry_date,
        item.expected_delivery_date,
        item.last_stocktake_date,
        item.last_stocktake_by,
        item.price,
        item.size,
    )


class MySQLInventoryRepository(InventoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[InventoryItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY location, category, name")
            return [_row_to_item(r) for r in fetchall(cur)]

    def get_by_id(self, item_id: str) -> Optional[InventoryItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (item_id,))
            r = fetchone(cur)
            return _row_to_item(r) if r else None

    def add(self, item: InventoryItem) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO inventory_items(id, {_COLUMNS}) VALUES({', '.join(['%s'] * 15)})",
                (item.id, *_values(item)),
            )

    def replace(self, item: InventoryItem) -> bool:
        assignments = ", ".join(f"{c.strip()}=%s" for c in _COLUMNS.split(","))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE inventory_items SET {assignments} WHERE id=%s",
                (*_values(item), item.id),
            )
            return cur.rowcount > 0
