from __future__ import annotations

from typing import Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id
from .model import Announcement
from .repository import AnnouncementRepository


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, title: str, message: str, created_by: str) -> str:
        announcement_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO announcements(id, title, message, created_by) VALUES(%s,%s,%s,%s)",
                (announcement_id, title, message, created_by),
            )
        return announcement_id

    def list_recent(self, *, limit: int) -> Sequence[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.title, a.message, a.created_by, a.created_at,
                       p.name AS author_name, p.role AS author_role
                FROM announcements a
                JOIN profiles p ON p.id = a.created_by
                ORDER BY a.created_at DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [
                Announcement(
                    id=r["id"],
                    title=r["title"],
                    message=r["message"],
                    created_by=r["created_by"],
                    author_name=r["author_name"],
                    author_role=Role(r["author_role"]),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]
