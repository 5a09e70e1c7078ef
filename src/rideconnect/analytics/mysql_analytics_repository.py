from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, new_id
from .model import AnalyticsLog
from .repository import AnalyticsRepository


def _load_details(raw):
    if raw is None or isinstance(raw, (dict, list)):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    try:
        return json.loads(raw)
    except ValueError:
        return raw


class MySQLAnalyticsRepository(AnalyticsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: str, action: str, details_json: Optional[str]) -> str:
        log_id = new_id()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO analytics_logs(id, user_id, action, details) VALUES(%s,%s,%s,%s)",
                (log_id, user_id, action, details_json),
            )
        return log_id

    def list_recent(self, *, limit: int, action: Optional[str] = None) -> Sequence[AnalyticsLog]:
        clauses = []
        params: list[object] = []
        if action:
            clauses.append("l.action=%s")
            params.append(action)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT l.id, l.user_id, l.action, l.details, l.timestamp,
                       p.name AS user_name, p.email AS user_email
                FROM analytics_logs l
                LEFT JOIN profiles p ON p.id = l.user_id
                {where}
                ORDER BY l.timestamp DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [
                AnalyticsLog(
                    id=r["id"],
                    user_id=r["user_id"],
                    action=r["action"],
                    details=_load_details(r.get("details")),
                    timestamp=r.get("timestamp"),
                    user_name=r.get("user_name"),
                    user_email=r.get("user_email"),
                )
                for r in fetchall(cur)
            ]
