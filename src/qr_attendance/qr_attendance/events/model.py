from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES
from ..core.enums import AttendanceType, EventStatus
from ..common.datetime_utils import combine_hhmm


@dataclass(frozen=True)
class Event:
    """Domain entity: a school event with sign-in/sign-out windows.

    Window bounds are canonical `HH:MM` strings so they compare correctly as text.
    """

    event_id: str
    title: str
    event_date: date
    venue: str
    sign_in_start: str
    sign_in_end: str
    sign_out_start: str
    sign_out_end: str
    grace_period_minutes: int = DEFAULT_GRACE_PERIOD_MINUTES
    status: EventStatus = EventStatus.UPCOMING
    description: Optional[str] = None

    def window_for(self, attendance_type: AttendanceType) -> tuple[str, str]:
        if attendance_type == AttendanceType.SIGN_IN:
            return self.sign_in_start, self.sign_in_end
        return self.sign_out_start, self.sign_out_end

    def late_after(self) -> datetime:
        """Sign-ins recorded strictly after this moment count as late."""
        return combine_hhmm(self.event_date, self.sign_in_start) + timedelta(minutes=int(self.grace_period_minutes))

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "title": self.title,
            "eventDate": self.event_date.strftime("%Y-%m-%d"),
            "venue": self.venue,
            "signInStart": self.sign_in_start,
            "signInEnd": self.sign_in_end,
            "signOutStart": self.sign_out_start,
            "signOutEnd": self.sign_out_end,
            "gracePeriodMinutes": self.grace_period_minutes,
            "status": self.status.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class NewEvent:
    """Validated input for creating or replacing an event."""

    title: str
    event_date: date
    venue: str
    sign_in_start: str
    sign_in_end: str
    sign_out_start: str
    sign_out_end: str
    grace_period_minutes: int
    status: EventStatus
    description: Optional[str] = None
