from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import NewStudent, Student


class StudentRepository(Protocol):
    def get_by_uid(self, uid: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_roster(self) -> Sequence[Student]:
        """Every registered student, ordered by last name."""

        raise NotImplementedError

    def list_by_status(self, status: ApprovalStatus) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, data: NewStudent) -> str:
        """Returns uid. Raises ValidationError if student_id is already taken."""

        raise NotImplementedError

    def set_approval_status(self, uid: str, status: ApprovalStatus) -> bool:
        raise NotImplementedError

    def delete(self, uid: str) -> bool:
        raise NotImplementedError
