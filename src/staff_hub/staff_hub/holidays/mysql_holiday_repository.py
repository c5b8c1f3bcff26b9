from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import HolidayRequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import HolidayRequest
from .repository import HolidayRequestRepository

_SELECT = """
    SELECT id, employee_id, start_date, end_date, status, created_at, reason
    FROM holiday_requests
"""


def _row_to_request(r: dict) -> HolidayRequest:
    return HolidayRequest(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        start_date=int(r["start_date"]),
        end_date=int(r["end_date"]),
        status=HolidayRequestStatus(r["status"]),
        created_at=int(r["created_at"]),
        reason=r.get("reason"),
    )


class MySQLHolidayRequestRepository(HolidayRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[HolidayRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY created_at DESC")
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str) -> Sequence[HolidayRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY created_at DESC", (employee_id,))
            return [_row_to_request(r) for r in fetchall(cur)]

    def get_by_id(self, request_id: str) -> Optional[HolidayRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (request_id,))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def add(self, request: HolidayRequest) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO holiday_requests(id, employee_id, start_date, end_date, status, created_at, reason)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.id,
                    request.employee_id,
                    request.start_date,
                    request.end_date,
                    request.status.value,
                    request.created_at,
                    request.reason,
                ),
            )

    def decide(self, *, request_id: str, status: HolidayRequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE holiday_requests SET status=%s WHERE id=%s AND status=%s",
                (status.value, request_id, HolidayRequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
