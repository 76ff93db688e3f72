from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Which session window a scan belongs to."""

    SIGN_IN = "sign-in"
    SIGN_OUT = "sign-out"

    @property
    def label(self) -> str:
        return "Sign-In" if self is AttendanceType.SIGN_IN else "Sign-Out"

    @property
    def window_name(self) -> str:
        return "Sign-in" if self is AttendanceType.SIGN_IN else "Sign-out"

    @property
    def past_tense(self) -> str:
        return "signed in" if self is AttendanceType.SIGN_IN else "signed out"


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ApprovalStatus(str, Enum):
    """Registration state of a student account."""

    PENDING = "pending"
    APPROVED = "approved"


class AttendanceStatus(str, Enum):
    """Per-student, per-event classification shown in reports."""

    COMPLETE = "Complete"
    LATE_COMPLETE = "Late (Complete)"
    INCOMPLETE_NO_SIGN_OUT = "Incomplete (No Sign-Out)"
    INCOMPLETE_NO_SIGN_IN = "Incomplete (No Sign-In)"
    LATE_INCOMPLETE = "Late (Incomplete)"
    ABSENT = "Absent"

    @property
    def is_complete(self) -> bool:
        return self in (AttendanceStatus.COMPLETE, AttendanceStatus.LATE_COMPLETE)

    @property
    def is_incomplete(self) -> bool:
        return "Incomplete" in self.value

    @property
    def is_late(self) -> bool:
        return "Late" in self.value


class StatusFilter(str, Enum):
    """Report table filter buckets."""

    ALL = "all"
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    LATE = "late"
    ABSENT = "absent"

    def matches(self, status: AttendanceStatus) -> bool:
        if self is StatusFilter.ALL:
            return True
        if self is StatusFilter.COMPLETE:
            return status.is_complete
        if self is StatusFilter.INCOMPLETE:
            return status.is_incomplete
        if self is StatusFilter.LATE:
            return status.is_late
        return status is AttendanceStatus.ABSENT


class ScanState(str, Enum):
    """Scanner screen steps."""

    SCAN_READY = "scan-ready"
    SCANNING = "scanning"
    CONFIRM = "confirm"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"
