from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: Student.

    `uid` is the opaque storage id; `student_id` is the school-issued business key that
    attendance records refer to.
    """

    uid: str
    student_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    course: Optional[str] = None
    year_level: Optional[str] = None
    section: Optional[str] = None
    approval_status: ApprovalStatus = ApprovalStatus.APPROVED

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "studentId": self.student_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "middleName": self.middle_name,
            "course": self.course,
            "yearLevel": self.year_level,
            "section": self.section,
            "approvalStatus": self.approval_status.value,
        }


@dataclass(frozen=True)
class NewStudent:
    student_id: str
    first_name: str
    last_name: str
    middle_name: Optional[str]
    course: Optional[str]
    year_level: Optional[str]
    section: Optional[str]
    approval_status: ApprovalStatus
