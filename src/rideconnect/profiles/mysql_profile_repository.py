from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, new_id, translate_integrity_errors
from .model import Profile
from .repository import ProfileRepository

_COLUMNS = "id, name, email, role, password_hash, created_at, updated_at"


def _to_profile(row: dict) -> Profile:
    return Profile(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE id=%s", (profile_id,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_email(self, email: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def create_profile(self, *, name: str, email: str, role: Role, password_hash: str) -> str:
        profile_id = new_id()
        with translate_integrity_errors("An account with this email already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO profiles(id, name, email, role, password_hash)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (profile_id, name, email, role.value, password_hash),
                )
        return profile_id

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles ORDER BY created_at DESC")
            return [_to_profile(r) for r in fetchall(cur)]

    def list_by_role(self, role: Role) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM profiles WHERE role=%s ORDER BY name", (role.value,))
            return [_to_profile(r) for r in fetchall(cur)]
