from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import ApprovalStatus
from ..core.exceptions import AuthenticationError, ValidationError
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentSession:
    """Logged-in student, issued at login and passed explicitly to scan/record calls."""

    uid: str
    student_id: str
    first_name: str
    last_name: str
    course: Optional[str]
    year_level: Optional[str]
    section: Optional[str]
    issued_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["issued_at"] = self.issued_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "StudentSession":
        return cls(
            uid=data["uid"],
            student_id=data["student_id"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            course=data.get("course"),
            year_level=data.get("year_level"),
            section=data.get("section"),
            issued_at=datetime.fromisoformat(data["issued_at"]),
        )


class StudentAuthService:
    """Use case: student portal login/logout by student ID."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def login(self, student_id: str, *, now: Optional[datetime] = None) -> StudentSession:
        student_id = str(student_id or "").strip()
        student = self._students.get_by_student_id(student_id) if student_id else None
        if not student:
            raise AuthenticationError()
        if student.approval_status != ApprovalStatus.APPROVED:
            raise AuthenticationError("Your registration is still waiting for admin approval")

        logger.info("student login student_id=%s", student.student_id)
        return StudentSession(
            uid=student.uid,
            student_id=student.student_id,
            first_name=student.first_name,
            last_name=student.last_name,
            course=student.course,
            year_level=student.year_level,
            section=student.section,
            issued_at=now or now_local(),
        )

    def logout(self, session: Optional[StudentSession]) -> None:
        if session:
            logger.info("student logout student_id=%s", session.student_id)


class StudentService:
    """Use case: registration and approval of students."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def _create(self, *, status: ApprovalStatus, **fields) -> str:
        data = NewStudent(
            student_id=require_non_empty(fields.get("student_id", ""), "Student ID"),
            first_name=require_non_empty(fields.get("first_name", ""), "First name"),
            last_name=require_non_empty(fields.get("last_name", ""), "Last name"),
            middle_name=str(fields.get("middle_name") or "").strip() or None,
            course=str(fields.get("course") or "").strip() or None,
            year_level=str(fields.get("year_level") or "").strip() or None,
            section=str(fields.get("section") or "").strip() or None,
            approval_status=status,
        )

        if self._students.get_by_student_id(data.student_id):
            raise ValidationError("Student ID already exists")

        return self._students.create(data)

    def add_student(self, **fields) -> str:
        """Staff entry: the account is usable immediately."""
        return self._create(status=ApprovalStatus.APPROVED, **fields)

    def register(self, **fields) -> str:
        """Self-registration: waits for staff approval before login is allowed."""
        uid = self._create(status=ApprovalStatus.PENDING, **fields)
        logger.info("student registered uid=%s (pending approval)", uid)
        return uid

    def list_pending(self) -> Sequence[Student]:
        return self._students.list_by_status(ApprovalStatus.PENDING)

    def approve(self, uid: str) -> None:
        student = self._students.get_by_uid(uid)
        if not student:
            raise ValidationError("Student not found")
        if student.approval_status == ApprovalStatus.APPROVED:
            return
        self._students.set_approval_status(uid, ApprovalStatus.APPROVED)
        logger.info("student approved student_id=%s", student.student_id)

    def reject(self, uid: str) -> None:
        student = self._students.get_by_uid(uid)
        if not student:
            raise ValidationError("Student not found")
        if student.approval_status != ApprovalStatus.PENDING:
            raise ValidationError("Only pending registrations can be rejected")
        self._students.delete(uid)
        logger.info("student registration rejected student_id=%s", student.student_id)
