from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, translate_integrity_errors
from .model import Bus
from .repository import BusRepository

_COLUMNS = "id, bus_number, route_name, capacity, created_at, updated_at"

_ORDERINGS = {
    "bus_number": "bus_number ASC",
    "created_at": "created_at DESC",
}


def _to_bus(row: dict) -> Bus:
    capacity = row.get("capacity")
    return Bus(
        id=row["id"],
        bus_number=row["bus_number"],
        route_name=row["route_name"],
        capacity=int(capacity) if capacity is not None else None,
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLBusRepository(BusRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, bus_id: str) -> Optional[Bus]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM buses WHERE id=%s", (bus_id,))
            row = fetchone(cur)
            return _to_bus(row) if row else None

    def get_by_number(self, bus_number: str) -> Optional[Bus]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM buses WHERE bus_number=%s", (bus_number,))
            row = fetchone(cur)
            return _to_bus(row) if row else None

    def create_bus(self, *, bus_number: str, route_name: str, capacity: Optional[int]) -> str:
        bus_id = new_id()
        with translate_integrity_errors(f"Bus {bus_number} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO buses(id, bus_number, route_name, capacity) VALUES(%s,%s,%s,%s)",
                    (bus_id, bus_number, route_name, capacity),
                )
        return bus_id

    def list_all(self, *, order_by: str = "bus_number") -> Sequence[Bus]:
        order = _ORDERINGS.get(order_by)
        if order is None:
            raise ValueError(f"Unsupported bus ordering: {order_by!r}")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM buses ORDER BY {order}")
            return [_to_bus(r) for r in fetchall(cur)]
