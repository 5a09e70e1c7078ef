from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class AnalyticsLog:
    id: str
    user_id: str
    action: str
    details: Optional[Any]
    timestamp: Optional[datetime] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
