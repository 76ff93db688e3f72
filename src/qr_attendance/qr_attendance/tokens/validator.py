from __future__ import annotations

import math
from typing import Callable, Optional

from ..core.constants import QR_MAX_AGE_SLOTS, QR_VALIDITY_SECONDS
from ..core.exceptions import MissingTokenError, TokenExpiredError
from ..common.datetime_utils import now_unix
from .generator import encode_slot, slot_at


class TokenValidator:
    """Scanner side: re-derives the expected tokens locally, no storage access.

    Accepts the token of the current slot or the one before it, so a code drawn just
    before a boundary still works while the student finishes scanning. Stateless: every
    frame is checked from scratch.
    """

    def __init__(self, *, window_seconds: int = QR_VALIDITY_SECONDS, clock: Callable[[], float] = now_unix):
        if int(window_seconds) <= 0:
            raise ValueError("window_seconds must be positive")
        self._window = int(window_seconds)
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return self._window

    def expected_tokens(self, *, now_unix: Optional[float] = None) -> tuple[str, str]:
        now = math.floor(self._clock() if now_unix is None else now_unix)
        current = slot_at(now, self._window)
        return encode_slot(current), encode_slot(current - 1)

    def check(self, token: Optional[str], ts: Optional[float], *, now_unix: Optional[float] = None) -> None:
        if not token or not ts:
            raise MissingTokenError()

        now = math.floor(self._clock() if now_unix is None else now_unix)
        issued = math.floor(ts) // 1000
        if now - issued > QR_MAX_AGE_SLOTS * self._window:
            raise TokenExpiredError()

        if token not in self.expected_tokens(now_unix=now):
            raise TokenExpiredError()
