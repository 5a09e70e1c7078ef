from __future__ import annotations

import logging

from ..core.constants import ANNOUNCEMENT_FEED_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def create(self, *, current_role: Role, author_id: str, title: str, message: str) -> str:
        if current_role not in {Role.STAFF, Role.ADMIN}:
            raise AuthorizationError("Only staff can post announcements")

        title = (title or "").strip()
        message = (message or "").strip()
        if not title or not message:
            raise ValidationError("Please fill in both title and message")

        announcement_id = self._announcements.create(title=title, message=message, created_by=author_id)
        logger.info("Announcement %r posted by %s", title, author_id)
        return announcement_id

    def list_recent(self, limit: int = ANNOUNCEMENT_FEED_LIMIT) -> list[Announcement]:
        return list(self._announcements.list_recent(limit=int(limit)))
