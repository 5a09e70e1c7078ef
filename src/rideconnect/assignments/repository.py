from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AssignmentRow, BusAssignment


class AssignmentRepository(Protocol):
    def get_by_id(self, assignment_id: str) -> Optional[BusAssignment]:
        raise NotImplementedError

    def get_for_student(self, student_id: str) -> Optional[AssignmentRow]:
        raise NotImplementedError

    def create_assignment(self, *, student_id: str, bus_id: str, assigned_by: Optional[str]) -> str:
        """Insert an assignment atomically with the capacity check.

        Raises ValidationError when the student already has a bus or the bus is full.
        """

        raise NotImplementedError

    def delete(self, assignment_id: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[AssignmentRow]:
        """All assignments, most recent first."""

        raise NotImplementedError
