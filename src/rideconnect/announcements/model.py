from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Announcement:
    """Announcement joined with its author's name and role."""

    id: str
    title: str
    message: str
    created_by: str
    author_name: str
    author_role: Role
    created_at: Optional[datetime] = None
