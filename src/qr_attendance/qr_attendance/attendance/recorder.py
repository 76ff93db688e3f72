from __future__ import annotations

import logging

from ..core.enums import AttendanceType
from ..core.exceptions import DuplicateAttendanceError
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceRecorder:
    """Writes one sign-in or sign-out, at most once per (event, student, type).

    The lookup-then-insert pair is not atomic; the storage unique key catches the
    concurrent case and surfaces the same DuplicateAttendanceError.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def record(
        self,
        *,
        event_id: str,
        student_id: str,
        type: AttendanceType,
        student_name: str,
        event_title: str,
    ) -> str:
        if self._attendance.find(event_id=event_id, student_id=student_id, type=type):
            raise DuplicateAttendanceError(type)

        attendance_id = self._attendance.insert(
            event_id=event_id,
            student_id=student_id,
            type=type,
            student_name=student_name,
            event_title=event_title,
        )
        logger.info("attendance recorded id=%s event=%s student=%s type=%s", attendance_id, event_id, student_id, type.value)
        return attendance_id
