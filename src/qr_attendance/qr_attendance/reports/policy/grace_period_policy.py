from __future__ import annotations

from ...attendance.model import AttendanceRecord
from ...events.model import Event
from .base import LatenessPolicy


class GracePeriodLatenessPolicy(LatenessPolicy):
    """Late when the sign-in was stored strictly after event date + sign-in start + grace."""

    def is_late(self, event: Event, sign_in: AttendanceRecord) -> bool:
        return sign_in.timestamp > event.late_after()
