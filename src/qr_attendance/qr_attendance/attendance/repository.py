from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def find(self, *, event_id: str, student_id: str, type: AttendanceType) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(
        self,
        *,
        event_id: str,
        student_id: str,
        type: AttendanceType,
        student_name: str,
        event_title: str,
    ) -> str:
        """Store a record stamped with the storage clock.

        Returns attendance_id. Raises DuplicateAttendanceError when the storage-level
        unique key on (event_id, student_id, type) rejects the row.
        """

        raise NotImplementedError

    def list_for_event(self, event_id: str) -> Sequence[AttendanceRecord]:
        """Oldest first."""

        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def delete_for_event(self, event_id: str) -> int:
        raise NotImplementedError
