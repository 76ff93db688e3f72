from __future__ import annotations

from abc import ABC, abstractmethod

from ...attendance.model import AttendanceRecord
from ...events.model import Event


class LatenessPolicy(ABC):
    """Strategy interface: decide whether a stored sign-in counts as late."""

    @abstractmethod
    def is_late(self, event: Event, sign_in: AttendanceRecord) -> bool:
        raise NotImplementedError
