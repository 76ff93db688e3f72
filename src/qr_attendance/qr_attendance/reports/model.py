from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..events.model import Event
from ..students.model import Student


@dataclass(frozen=True)
class StudentAttendanceRow:
    """One roster member's classified attendance for one event."""

    student: Student
    sign_in: Optional[AttendanceRecord]
    sign_out: Optional[AttendanceRecord]
    status: AttendanceStatus

    def to_dict(self) -> dict:
        data = self.student.to_dict()
        data.update(
            {
                "signIn": self.sign_in.to_dict() if self.sign_in else None,
                "signOut": self.sign_out.to_dict() if self.sign_out else None,
                "status": self.status.value,
            }
        )
        return data


@dataclass(frozen=True)
class AttendanceSummary:
    """Per-event aggregate, computed on read.

    `complete + incomplete + absent == total_students`; `late` overlaps the first two.
    """

    event: Event
    total_students: int
    signed_in: int
    signed_out: int
    complete: int
    incomplete: int
    absent: int
    late: int
    records: list[StudentAttendanceRow]

    def to_dict(self) -> dict:
        return {
            "event": self.event.to_dict(),
            "totalStudents": self.total_students,
            "signedIn": self.signed_in,
            "signedOut": self.signed_out,
            "complete": self.complete,
            "incomplete": self.incomplete,
            "absent": self.absent,
            "late": self.late,
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class EventAttendanceHistory:
    event: Optional[Event]
    event_id: str
    event_title: str
    sign_in: Optional[AttendanceRecord]
    sign_out: Optional[AttendanceRecord]
    status: AttendanceStatus

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "eventTitle": self.event_title,
            "event": self.event.to_dict() if self.event else None,
            "signIn": self.sign_in.to_dict() if self.sign_in else None,
            "signOut": self.sign_out.to_dict() if self.sign_out else None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class StudentHistory:
    entries: list[EventAttendanceHistory]
    total: int
    complete: int
    incomplete: int
    sign_ins: int
    sign_outs: int

    def to_dict(self) -> dict:
        return {
            "records": [e.to_dict() for e in self.entries],
            "stats": {
                "total": self.total,
                "complete": self.complete,
                "incomplete": self.incomplete,
                "signIns": self.sign_ins,
                "signOuts": self.sign_outs,
            },
        }
