from __future__ import annotations

from ..attendance.repository import AttendanceRepository
from ..core.enums import AttendanceType
from ..events.repository import EventRepository
from .model import EventAttendanceHistory, StudentHistory
from .service import base_status


class AttendanceHistoryService:
    """Student portal view: one row per event the student has any record for.

    No lateness here, only whether both halves were recorded.
    """

    def __init__(self, attendance: AttendanceRepository, events: EventRepository):
        self._attendance = attendance
        self._events = events

    def for_student(self, student_id: str) -> StudentHistory:
        records = self._attendance.list_for_student(student_id)

        grouped: dict[str, dict] = {}
        for r in records:
            item = grouped.get(r.event_id)
            if item is None:
                item = {"title": r.event_title, "sign_in": None, "sign_out": None}
                grouped[r.event_id] = item
            key = "sign_in" if r.type == AttendanceType.SIGN_IN else "sign_out"
            if item[key] is None:
                item[key] = r

        entries = []
        for event_id, item in grouped.items():
            event = self._events.get_by_id(event_id)
            entries.append(
                EventAttendanceHistory(
                    event=event,
                    event_id=event_id,
                    event_title=event.title if event else item["title"],
                    sign_in=item["sign_in"],
                    sign_out=item["sign_out"],
                    status=base_status(item["sign_in"], item["sign_out"]),
                )
            )

        return StudentHistory(
            entries=entries,
            total=len(entries),
            complete=len([e for e in entries if e.status.is_complete]),
            incomplete=len([e for e in entries if e.status.is_incomplete]),
            sign_ins=len([r for r in records if r.type == AttendanceType.SIGN_IN]),
            sign_outs=len([r for r in records if r.type == AttendanceType.SIGN_OUT]),
        )
