from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one sign-in or sign-out.

    `student_id` is the business key (not the student's opaque id). `timestamp` is set
    by storage at insert time; records are never updated afterwards.
    """

    attendance_id: str
    event_id: str
    student_id: str
    type: AttendanceType
    timestamp: datetime
    student_name: str = ""
    event_title: str = ""

    def to_dict(self) -> dict:
        return {
            "attendanceId": self.attendance_id,
            "eventId": self.event_id,
            "studentId": self.student_id,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
            "studentName": self.student_name,
            "eventTitle": self.event_title,
        }
