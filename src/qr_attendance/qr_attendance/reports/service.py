from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceStatus, AttendanceType, StatusFilter
from ..core.exceptions import EventNotFoundError
from ..events.repository import EventRepository
from ..students.repository import StudentRepository
from .model import AttendanceSummary, StudentAttendanceRow
from .policy.base import LatenessPolicy
from .policy.grace_period_policy import GracePeriodLatenessPolicy


def base_status(sign_in: Optional[AttendanceRecord], sign_out: Optional[AttendanceRecord]) -> AttendanceStatus:
    if sign_in and sign_out:
        return AttendanceStatus.COMPLETE
    if sign_in:
        return AttendanceStatus.INCOMPLETE_NO_SIGN_OUT
    if sign_out:
        return AttendanceStatus.INCOMPLETE_NO_SIGN_IN
    return AttendanceStatus.ABSENT


def _first_by_student(records: Sequence[AttendanceRecord]) -> dict[str, AttendanceRecord]:
    # Records arrive oldest first; the earliest one per student wins.
    out: dict[str, AttendanceRecord] = {}
    for r in records:
        out.setdefault(r.student_id, r)
    return out


class AttendanceSummaryService:
    """Builds the per-event report by joining the full roster with the event's records.

    Nothing is cached: roster and attendance change independently, so every call
    re-reads both.
    """

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        events: EventRepository,
        *,
        policy: Optional[LatenessPolicy] = None,
    ):
        self._students = students
        self._attendance = attendance
        self._events = events
        self._policy = policy or GracePeriodLatenessPolicy()

    def build_summary(self, event_id: str) -> AttendanceSummary:
        event = self._events.get_by_id(event_id)
        if not event:
            raise EventNotFoundError()

        records = self._attendance.list_for_event(event_id)
        roster = self._students.list_roster()

        sign_ins = [r for r in records if r.type == AttendanceType.SIGN_IN]
        sign_outs = [r for r in records if r.type == AttendanceType.SIGN_OUT]
        sign_in_by_student = _first_by_student(sign_ins)
        sign_out_by_student = _first_by_student(sign_outs)

        rows: list[StudentAttendanceRow] = []
        for student in roster:
            sign_in = sign_in_by_student.get(student.student_id)
            sign_out = sign_out_by_student.get(student.student_id)
            status = base_status(sign_in, sign_out)

            if sign_in and self._policy.is_late(event, sign_in):
                status = AttendanceStatus.LATE_COMPLETE if sign_out else AttendanceStatus.LATE_INCOMPLETE

            rows.append(StudentAttendanceRow(student=student, sign_in=sign_in, sign_out=sign_out, status=status))

        return AttendanceSummary(
            event=event,
            total_students=len(roster),
            signed_in=len(sign_ins),
            signed_out=len(sign_outs),
            complete=len([r for r in rows if r.status.is_complete]),
            incomplete=len([r for r in rows if r.status.is_incomplete]),
            absent=len([r for r in rows if r.status is AttendanceStatus.ABSENT]),
            late=len([r for r in rows if r.status.is_late]),
            records=rows,
        )

    @staticmethod
    def filter_rows(
        rows: Sequence[StudentAttendanceRow],
        *,
        search: str = "",
        status: StatusFilter = StatusFilter.ALL,
    ) -> list[StudentAttendanceRow]:
        """Report table filter: case-insensitive substring on ID, names or course, plus a status bucket."""
        term = (search or "").strip().lower()
        status = StatusFilter(status)

        def matches_search(row: StudentAttendanceRow) -> bool:
            if not term:
                return True
            s = row.student
            fields = (s.student_id, s.first_name, s.last_name, s.course)
            return any(term in (f or "").lower() for f in fields)

        return [r for r in rows if matches_search(r) and status.matches(r.status)]
