from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Bus:
    id: str
    bus_number: str
    route_name: str
    capacity: Optional[int]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
