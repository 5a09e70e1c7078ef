from __future__ import annotations

import csv
import io
import json
import logging
from typing import Any, Optional, Sequence

from ..core.constants import ANALYTICS_PAGE_LIMIT
from ..core.enums import AnalyticsAction
from .model import AnalyticsLog
from .repository import AnalyticsRepository

logger = logging.getLogger(__name__)

CSV_FIELDS = ["timestamp", "action", "user_name", "user_email", "details"]


class AnalyticsService:
    """Audit trail of user actions."""

    def __init__(self, logs: AnalyticsRepository):
        self._logs = logs

    def record(self, *, user_id: Optional[str], action: AnalyticsAction, details: Optional[dict] = None) -> None:
        """Write one audit row. Never raises: a failed audit must not fail the user action."""
        if not user_id:
            return
        try:
            details_json = json.dumps(details, default=str) if details is not None else None
            self._logs.create(user_id=user_id, action=action.value, details_json=details_json)
        except Exception:
            logger.exception("Failed to record analytics action %s for %s", action.value, user_id)

    def list_recent(self, *, limit: int = ANALYTICS_PAGE_LIMIT, action: str = "") -> list[AnalyticsLog]:
        action = (action or "").strip()
        if action and action not in {a.value for a in AnalyticsAction}:
            action = ""
        return list(self._logs.list_recent(limit=int(limit), action=action or None))

    @staticmethod
    def to_csv(logs: Sequence[AnalyticsLog]) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for log in logs:
            writer.writerow(
                {
                    "timestamp": log.timestamp.strftime("%Y-%m-%d %H:%M:%S") if log.timestamp else "",
                    "action": log.action,
                    "user_name": log.user_name or "",
                    "user_email": log.user_email or "",
                    "details": json.dumps(log.details, default=str) if log.details is not None else "",
                }
            )
        return out.getvalue().encode("utf-8-sig")


def action_choices() -> list[str]:
    return [a.value for a in AnalyticsAction]
