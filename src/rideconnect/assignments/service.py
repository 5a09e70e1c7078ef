from __future__ import annotations

import logging
from typing import Optional

from ..buses.repository import BusRepository
from ..common.filters import filter_rows
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from .model import AssignmentRow
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)

_MANAGERS = {Role.STAFF, Role.ADMIN}


class AssignmentService:
    """Use case: staff place students on buses."""

    def __init__(self, assignments: AssignmentRepository, profiles: ProfileRepository, buses: BusRepository):
        self._assignments = assignments
        self._profiles = profiles
        self._buses = buses

    def assign(self, *, current_role: Role, assigner_id: Optional[str], student_id: str, bus_id: str) -> str:
        if current_role not in _MANAGERS:
            raise AuthorizationError("Only staff can assign students to buses")

        student_id = (student_id or "").strip()
        bus_id = (bus_id or "").strip()
        if not student_id or not bus_id:
            raise ValidationError("Please select both student and bus")

        student = self._profiles.get_by_id(student_id)
        if not student:
            raise ValidationError("Student not found")
        if student.role != Role.STUDENT:
            raise ValidationError(f"{student.name} is not a student")

        bus = self._buses.get_by_id(bus_id)
        if not bus:
            raise ValidationError("Bus not found")

        if self._assignments.get_for_student(student_id):
            raise ValidationError(f"{student.name} is already assigned to a bus")

        # capacity is checked by the repository under a lock on the bus row
        assignment_id = self._assignments.create_assignment(
            student_id=student_id,
            bus_id=bus_id,
            assigned_by=assigner_id,
        )
        logger.info("Assigned %s to bus %s", student.email, bus.bus_number)
        return assignment_id

    def unassign(self, *, current_role: Role, assignment_id: str) -> None:
        if current_role not in _MANAGERS:
            raise AuthorizationError("Only staff can remove bus assignments")

        if not self._assignments.get_by_id(assignment_id):
            raise ValidationError("Assignment not found")
        if not self._assignments.delete(assignment_id):
            raise ValidationError("Failed to remove assignment")

    def get_for_student(self, student_id: str) -> Optional[AssignmentRow]:
        return self._assignments.get_for_student(student_id)

    def list_all(self, search: str = "") -> list[AssignmentRow]:
        return filter_rows(self._assignments.list_all(), search, ("student_name", "bus_number"))
