from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, translate_integrity_errors
from .model import WhitelistedUser
from .repository import WhitelistRepository

_COLUMNS = "id, email, name, role, added_by, added_at, is_active, is_registered, registered_at"


def _to_entry(row: dict) -> WhitelistedUser:
    return WhitelistedUser(
        id=row["id"],
        email=row["email"],
        name=row["name"],
        role=Role(row["role"]),
        added_by=row.get("added_by"),
        added_at=row.get("added_at"),
        is_active=bool(row.get("is_active", True)),
        is_registered=bool(row.get("is_registered", False)),
        registered_at=row.get("registered_at"),
    )


class MySQLWhitelistRepository(WhitelistRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[WhitelistedUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM whitelisted_users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def create_entry(self, *, email: str, name: str, role: Role, added_by: Optional[str]) -> str:
        entry_id = new_id()
        with translate_integrity_errors("User is already whitelisted"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO whitelisted_users(id, email, name, role, added_by)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (entry_id, email, name, role.value, added_by),
                )
        return entry_id

    def mark_registered(self, *, entry_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE whitelisted_users
                SET is_registered=1, registered_at=NOW()
                WHERE id=%s AND is_registered=0
                """,
                (entry_id,),
            )
            return cur.rowcount > 0

    def clear_registered(self, *, entry_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE whitelisted_users SET is_registered=0, registered_at=NULL WHERE id=%s",
                (entry_id,),
            )

    def list_all(self) -> Sequence[WhitelistedUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM whitelisted_users ORDER BY added_at DESC")
            return [_to_entry(r) for r in fetchall(cur)]
