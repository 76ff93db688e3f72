from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import (
    require_choice,
    require_hhmm,
    require_iso_date,
    require_non_empty,
    require_non_negative_int,
)
from ..core.constants import DEFAULT_GRACE_PERIOD_MINUTES
from ..core.enums import EventStatus
from ..core.exceptions import EventNotFoundError
from .model import Event, NewEvent
from .repository import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    """Use case: staff manage events (create/edit/delete)."""

    def __init__(self, events: EventRepository, attendance: AttendanceRepository):
        self._events = events
        self._attendance = attendance

    @staticmethod
    def _build(
        *,
        title: str,
        event_date,
        venue: str,
        sign_in_start: str,
        sign_in_end: str,
        sign_out_start: str,
        sign_out_end: str,
        grace_period_minutes=DEFAULT_GRACE_PERIOD_MINUTES,
        status=EventStatus.UPCOMING.value,
        description: Optional[str] = None,
    ) -> NewEvent:
        grace = DEFAULT_GRACE_PERIOD_MINUTES if grace_period_minutes in (None, "") else grace_period_minutes
        data = NewEvent(
            title=require_non_empty(title, "Event title"),
            event_date=require_iso_date(event_date, "Event date"),
            venue=require_non_empty(venue, "Venue"),
            sign_in_start=require_hhmm(sign_in_start, "Sign-in start"),
            sign_in_end=require_hhmm(sign_in_end, "Sign-in end"),
            sign_out_start=require_hhmm(sign_out_start, "Sign-out start"),
            sign_out_end=require_hhmm(sign_out_end, "Sign-out end"),
            grace_period_minutes=require_non_negative_int(grace, "Grace period"),
            status=require_choice(status or EventStatus.UPCOMING.value, EventStatus, "Status"),
            description=(description or "").strip() or None,
        )
        _warn_on_window_order(data)
        return data

    def create_event(self, **fields) -> str:
        data = self._build(**fields)
        event_id = self._events.create(data)
        logger.info("event created id=%s title=%r date=%s", event_id, data.title, data.event_date)
        return event_id

    def update_event(self, event_id: str, **fields) -> None:
        data = self._build(**fields)
        if not self._events.update(event_id, data):
            raise EventNotFoundError()

    def delete_event(self, event_id: str) -> None:
        if not self._events.delete(event_id):
            raise EventNotFoundError()
        removed = self._attendance.delete_for_event(event_id)
        logger.info("event deleted id=%s attendance_removed=%d", event_id, removed)

    def get_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise EventNotFoundError()
        return event

    def list_events(self) -> Sequence[Event]:
        return self._events.list_all()


def _warn_on_window_order(data: NewEvent) -> None:
    # Out-of-order windows are accepted as entered; staff get a log line only.
    if data.sign_in_end < data.sign_in_start:
        logger.warning("event %r: sign-in ends (%s) before it starts (%s)", data.title, data.sign_in_end, data.sign_in_start)
    if data.sign_out_end < data.sign_out_start:
        logger.warning(
            "event %r: sign-out ends (%s) before it starts (%s)", data.title, data.sign_out_end, data.sign_out_start
        )
    if data.sign_out_start < data.sign_in_end:
        logger.warning(
            "event %r: sign-out opens (%s) before sign-in closes (%s)", data.title, data.sign_out_start, data.sign_in_end
        )
