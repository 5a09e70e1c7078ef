from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, translate_integrity_errors
from .model import AssignmentRow, BusAssignment
from .repository import AssignmentRepository

_JOINED_SELECT = """
    SELECT a.id, a.student_id, a.bus_id, a.assigned_at,
           p.name AS student_name, p.email AS student_email,
           b.bus_number, b.route_name, b.capacity
    FROM bus_assignments a
    JOIN profiles p ON p.id = a.student_id
    JOIN buses b ON b.id = a.bus_id
"""


def _to_row(r: dict) -> AssignmentRow:
    capacity = r.get("capacity")
    return AssignmentRow(
        id=r["id"],
        student_id=r["student_id"],
        student_name=r["student_name"],
        student_email=r["student_email"],
        bus_id=r["bus_id"],
        bus_number=r["bus_number"],
        route_name=r["route_name"],
        capacity=int(capacity) if capacity is not None else None,
        assigned_at=r.get("assigned_at"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, assignment_id: str) -> Optional[BusAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, student_id, bus_id, assigned_by, assigned_at FROM bus_assignments WHERE id=%s",
                (assignment_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return BusAssignment(
                id=r["id"],
                student_id=r["student_id"],
                bus_id=r["bus_id"],
                assigned_by=r.get("assigned_by"),
                assigned_at=r.get("assigned_at"),
            )

    def get_for_student(self, student_id: str) -> Optional[AssignmentRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_JOINED_SELECT + " WHERE a.student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_row(r) if r else None

    def create_assignment(self, *, student_id: str, bus_id: str, assigned_by: Optional[str]) -> str:
        assignment_id = new_id()
        with translate_integrity_errors("Student is already assigned to a bus"):
            with db_cursor(self._conn_factory) as (_, cur):
                # the row lock serialises concurrent assigns to the same bus until commit
                cur.execute("SELECT bus_number, capacity FROM buses WHERE id=%s FOR UPDATE", (bus_id,))
                bus = fetchone(cur)
                if not bus:
                    raise ValidationError("Bus not found")
                if bus["capacity"] is not None:
                    cur.execute("SELECT COUNT(*) AS n FROM bus_assignments WHERE bus_id=%s", (bus_id,))
                    if int(fetchone(cur)["n"]) >= int(bus["capacity"]):
                        raise ValidationError(f"Bus {bus['bus_number']} is full ({bus['capacity']} seats)")
                cur.execute(
                    """
                    INSERT INTO bus_assignments(id, student_id, bus_id, assigned_by)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (assignment_id, student_id, bus_id, assigned_by),
                )
        return assignment_id

    def delete(self, assignment_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM bus_assignments WHERE id=%s", (assignment_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[AssignmentRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_JOINED_SELECT + " ORDER BY a.assigned_at DESC")
            return [_to_row(r) for r in fetchall(cur)]
