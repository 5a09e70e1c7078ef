from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """A signed-up account (student, staff or admin)."""

    id: str
    name: str
    email: str
    role: Role
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
