from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AnalyticsLog


class AnalyticsRepository(Protocol):
    def create(self, *, user_id: str, action: str, details_json: Optional[str]) -> str:
        raise NotImplementedError

    def list_recent(self, *, limit: int, action: Optional[str] = None) -> Sequence[AnalyticsLog]:
        """Newest first, joined with the user's name and email."""

        raise NotImplementedError
