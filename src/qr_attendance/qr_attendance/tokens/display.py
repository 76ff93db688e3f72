from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import QR_REDRAW_SECONDS
from ..core.enums import AttendanceType
from .generator import TimeSlotTokenGenerator, slot_at
from .payload import QRPayload


@dataclass(frozen=True)
class DisplayFrame:
    payload: QRPayload
    redrawn: bool
    seconds_remaining: int


class DisplayClock:
    """Cooperative timers for the device showing the QR code.

    The owner calls `tick(now)` from its polling loop (about once a second). A new
    payload is drawn when the redraw cadence has elapsed or a slot boundary was crossed;
    otherwise the previous payload is kept and only the countdown moves.
    """

    def __init__(
        self,
        generator: TimeSlotTokenGenerator,
        event_id: str,
        attendance_type: AttendanceType,
        *,
        redraw_seconds: int = QR_REDRAW_SECONDS,
    ):
        if not 0 < int(redraw_seconds) < generator.window_seconds:
            raise ValueError("redraw_seconds must be positive and shorter than the token window")
        self._generator = generator
        self._event_id = event_id
        self._type = AttendanceType(attendance_type)
        self._redraw_seconds = int(redraw_seconds)

        self._payload: Optional[QRPayload] = None
        self._drawn_at: Optional[float] = None

    @property
    def payload(self) -> Optional[QRPayload]:
        return self._payload

    def _needs_redraw(self, now: float) -> bool:
        if self._payload is None or self._drawn_at is None:
            return True
        if now - self._drawn_at >= self._redraw_seconds:
            return True
        window = self._generator.window_seconds
        return slot_at(now, window) != slot_at(self._drawn_at, window)

    def tick(self, now_unix: float) -> DisplayFrame:
        redrawn = self._needs_redraw(now_unix)
        if redrawn:
            self._payload = self._generator.generate(self._event_id, self._type, now_unix=now_unix)
            self._drawn_at = now_unix

        countdown = self._generator.countdown(now_unix=now_unix)
        return DisplayFrame(payload=self._payload, redrawn=redrawn, seconds_remaining=countdown.seconds_remaining)
