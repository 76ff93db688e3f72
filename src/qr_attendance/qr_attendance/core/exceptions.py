from __future__ import annotations

from typing import Optional

from .enums import AttendanceType


class DomainError(Exception):
    """Base exception for business rule violations.

    `code` is a stable identifier for API clients; `retryable` tells the caller whether
    the same request may succeed if simply sent again.
    """

    code = "domain_error"
    default_message = "Request could not be processed"
    retryable = False

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"
    default_message = "Invalid input"


class AuthenticationError(DomainError):
    """Raised when a student cannot be logged in."""

    code = "authentication_failed"
    default_message = "Student ID not found. Please check your ID and try again."


class MalformedPayloadError(DomainError):
    """QR content is not the expected JSON shape."""

    code = "malformed_payload"
    default_message = "Invalid QR code. Please scan a valid event QR code."


class TokenInvalidError(DomainError):
    code = "token_invalid"
    default_message = "QR code has expired. Please scan a fresh code."


class MissingTokenError(TokenInvalidError):
    code = "missing_token"
    default_message = "Missing security token"


class TokenExpiredError(TokenInvalidError):
    code = "token_expired"
    default_message = "QR code has expired. Please scan a fresh code."


class EventNotFoundError(DomainError):
    code = "event_not_found"
    default_message = "Event not found"


class TimeWindowError(DomainError):
    """Scan happened outside the event's configured session window."""

    code = "time_window"


class EventNotTodayError(TimeWindowError):
    code = "event_not_today"

    def __init__(self, *, not_started: bool):
        self.not_started = not_started
        super().__init__("This event has not started yet" if not_started else "This event has already ended")


class WindowNotOpenError(TimeWindowError):
    code = "window_not_open"

    def __init__(self, attendance_type: AttendanceType, starts_at: str):
        self.attendance_type = attendance_type
        self.boundary = starts_at
        super().__init__(f"{attendance_type.window_name} starts at {starts_at}")


class WindowClosedError(TimeWindowError):
    code = "window_closed"

    def __init__(self, attendance_type: AttendanceType, ended_at: str):
        self.attendance_type = attendance_type
        self.boundary = ended_at
        super().__init__(f"{attendance_type.window_name} ended at {ended_at}")


class DuplicateAttendanceError(DomainError):
    code = "duplicate_attendance"

    def __init__(self, attendance_type: AttendanceType):
        self.attendance_type = attendance_type
        super().__init__(f"Student already {attendance_type.past_tense} for this event")


class StorageUnavailableError(DomainError):
    """Storage round-trip failed or timed out. Safe to retry."""

    code = "storage_unavailable"
    default_message = "Could not reach the attendance database. Please try again."
    retryable = True
