from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.constants import QR_VALIDITY_SECONDS
from ..core.enums import AttendanceType
from ..common.datetime_utils import now_unix
from .payload import QRPayload

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def encode_slot(slot: int) -> str:
    """Lowercase base-36 text of a slot index (variable width)."""
    if slot == 0:
        return "0"
    sign = "-" if slot < 0 else ""
    n = abs(int(slot))
    out: list[str] = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_DIGITS[rem])
    return sign + "".join(reversed(out))


def slot_at(unix_seconds: float, window_seconds: int) -> int:
    return math.floor(unix_seconds / window_seconds)


@dataclass(frozen=True)
class Countdown:
    slot: int
    next_boundary: int
    seconds_remaining: int


class TimeSlotTokenGenerator:
    """Display side: derives the rotating token from wall-clock time."""

    def __init__(self, *, window_seconds: int = QR_VALIDITY_SECONDS, clock: Callable[[], float] = now_unix):
        if int(window_seconds) <= 0:
            raise ValueError("window_seconds must be positive")
        self._window = int(window_seconds)
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return self._window

    def token_at(self, unix_seconds: float) -> str:
        return encode_slot(slot_at(unix_seconds, self._window))

    def generate(self, event_id: str, attendance_type: AttendanceType, *, now_unix: Optional[float] = None) -> QRPayload:
        now = self._clock() if now_unix is None else now_unix
        return QRPayload(
            event_id=event_id,
            type=AttendanceType(attendance_type),
            token=self.token_at(now),
            ts=int(now * 1000),
        )

    def countdown(self, *, now_unix: Optional[float] = None) -> Countdown:
        now = self._clock() if now_unix is None else now_unix
        current = math.floor(now)
        slot = slot_at(current, self._window)
        next_boundary = (slot + 1) * self._window
        return Countdown(slot=slot, next_boundary=next_boundary, seconds_remaining=next_boundary - current)

    def snapshot(
        self, event_id: str, attendance_type: AttendanceType, *, now_unix: Optional[float] = None
    ) -> tuple[QRPayload, Countdown]:
        """Payload and countdown from a single clock read, so both describe the same slot."""
        now = self._clock() if now_unix is None else now_unix
        return self.generate(event_id, attendance_type, now_unix=now), self.countdown(now_unix=now)
