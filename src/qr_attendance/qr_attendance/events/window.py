from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceType
from ..core.exceptions import EventNotTodayError, WindowClosedError, WindowNotOpenError
from ..common.datetime_utils import now_local, to_hhmm
from .model import Event


class AttendanceWindowEvaluator:
    """Admit/reject a live scan against the event's session windows.

    Lateness is not decided here: reports classify it later from the stored timestamp.
    Time-of-day values are compared as canonical `HH:MM` text, minutes resolution.
    """

    def check(self, event: Event, attendance_type: AttendanceType, *, now: Optional[datetime] = None) -> None:
        now = now or now_local()
        today = now.date()

        if event.event_date != today:
            raise EventNotTodayError(not_started=event.event_date > today)

        current = to_hhmm(now)
        start, end = event.window_for(attendance_type)
        if current < start:
            raise WindowNotOpenError(attendance_type, start)
        if current > end:
            raise WindowClosedError(attendance_type, end)
