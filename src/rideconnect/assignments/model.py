from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BusAssignment:
    """One student riding one bus."""

    id: str
    student_id: str
    bus_id: str
    assigned_by: Optional[str]
    assigned_at: Optional[datetime] = None


@dataclass(frozen=True)
class AssignmentRow:
    """Read-model for dashboards (assignment joined with student and bus)."""

    id: str
    student_id: str
    student_name: str
    student_email: str
    bus_id: str
    bus_number: str
    route_name: str
    capacity: Optional[int]
    assigned_at: Optional[datetime] = None
