from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import StockRequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import StockRequest
from .repository import StockRequestRepository

_SELECT = """
    SELECT id, item_name, experience, quantity, notes, submitter_name, status,
           created_timestamp, delivered_timestamp
    FROM stock_requests
"""


def _row_to_request(r: dict) -> StockRequest:
    return StockRequest(
        id=str(r["id"]),
        item_name=r["item_name"],
        experience=r["experience"],
        quantity=int(r["quantity"]),
        notes=r.get("notes") or "",
        submitter_name=r.get("submitter_name") or "",
        status=StockRequestStatus(r["status"]),
        created_timestamp=int(r["created_timestamp"]),
        delivered_timestamp=optional_int(r.get("delivered_timestamp")),
    )


class MySQLStockRequestRepository(StockRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StockRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_timestamp DESC")
            return [_row_to_request(r) for r in fetchall(cur)]

    def get_by_id(self, request_id: str) -> Optional[StockRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (request_id,))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def add(self, request: StockRequest) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO stock_requests(id, item_name, experience, quantity, notes, submitter_name,
                                           status, created_timestamp, delivered_timestamp)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.id,
                    request.item_name,
                    request.experience,
                    request.quantity,
                    request.notes,
                    request.submitter_name,
                    request.status.value,
                    request.created_timestamp,
                    request.delivered_timestamp,
                ),
            )

    def replace(self, request: StockRequest) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE stock_requests
                SET item_name=%s, experience=%s, quantity=%s, notes=%s, submitter_name=%s,
                    status=%s, created_timestamp=%s, delivered_timestamp=%s
                WHERE id=%s
                """,
                (
                    request.item_name,
                    request.experience,
                    request.quantity,
                    request.notes,
                    request.submitter_name,
                    request.status.value,
                    request.created_timestamp,
                    request.delivered_timestamp,
                    request.id,
                ),
            )
            return cur.rowcount > 0
