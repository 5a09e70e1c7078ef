from __future__ import annotations

from typing import Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def create(self, *, title: str, message: str, created_by: str) -> str:
        raise NotImplementedError

    def list_recent(self, *, limit: int) -> Sequence[Announcement]:
        raise NotImplementedError
