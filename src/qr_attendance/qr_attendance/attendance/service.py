from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceType
from ..core.exceptions import EventNotFoundError
from ..events.model import Event
from ..events.repository import EventRepository
from ..events.window import AttendanceWindowEvaluator
from ..students.service import StudentSession
from ..tokens.payload import QRPayload, decode_payload, require_valid
from ..tokens.validator import TokenValidator
from .recorder import AttendanceRecorder
from .repository import AttendanceRepository


@dataclass(frozen=True)
class ScanTicket:
    """A decoded, token-checked code waiting for the student to confirm."""

    payload: QRPayload
    event: Event

    @property
    def attendance_type(self) -> AttendanceType:
        return self.payload.type

    def to_dict(self) -> dict:
        return {
            "eventId": self.event.event_id,
            "type": self.payload.type.value,
            "typeLabel": self.payload.type.label,
            "event": self.event.to_dict(),
        }


@dataclass(frozen=True)
class ScanResult:
    attendance_id: str
    event_id: str
    event_title: str
    type: AttendanceType
    message: str

    def to_dict(self) -> dict:
        return {
            "attendanceId": self.attendance_id,
            "eventId": self.event_id,
            "eventTitle": self.event_title,
            "type": self.type.value,
            "message": self.message,
        }


class AttendanceService:
    """Use case: a logged-in student scans an event code and records attendance.

    Two steps, because the student confirms before anything is written:
    `inspect` decodes the code, checks its token and loads the event;
    `confirm` re-reads the event, checks the session window and records.
    """

    def __init__(
        self,
        events: EventRepository,
        attendance: AttendanceRepository,
        *,
        validator: TokenValidator,
        window_evaluator: Optional[AttendanceWindowEvaluator] = None,
        recorder: Optional[AttendanceRecorder] = None,
    ):
        self._events = events
        self._validator = validator
        self._window = window_evaluator or AttendanceWindowEvaluator()
        self._recorder = recorder or AttendanceRecorder(attendance)

    def _load_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise EventNotFoundError()
        return event

    def inspect(self, code: str, *, now_unix: Optional[float] = None) -> ScanTicket:
        payload = require_valid(decode_payload(code))
        self._validator.check(payload.token, payload.ts, now_unix=now_unix)
        event = self._load_event(payload.event_id)
        return ScanTicket(payload=payload, event=event)

    def confirm(
        self,
        event_id: str,
        attendance_type: AttendanceType,
        session: StudentSession,
        *,
        now: Optional[datetime] = None,
    ) -> ScanResult:
        attendance_type = AttendanceType(attendance_type)
        event = self._load_event(event_id)
        self._window.check(event, attendance_type, now=now)

        attendance_id = self._recorder.record(
            event_id=event.event_id,
            student_id=session.student_id,
            type=attendance_type,
            student_name=session.full_name,
            event_title=event.title,
        )
        return ScanResult(
            attendance_id=attendance_id,
            event_id=event.event_id,
            event_title=event.title,
            type=attendance_type,
            message=f"{attendance_type.label} successful!",
        )

    def scan(
        self,
        code: str,
        session: StudentSession,
        *,
        now: Optional[datetime] = None,
        now_unix: Optional[float] = None,
    ) -> ScanResult:
        """Inspect and confirm in one call, for clients without a confirm step."""
        ticket = self.inspect(code, now_unix=now_unix)
        return self.confirm(ticket.event.event_id, ticket.attendance_type, session, now=now)
