from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import ScanState
from ..core.exceptions import (
    DomainError,
    EventNotFoundError,
    MalformedPayloadError,
    StorageUnavailableError,
    TokenInvalidError,
    ValidationError,
)
from ..students.service import StudentSession
from .service import AttendanceService, ScanResult, ScanTicket

logger = logging.getLogger(__name__)

CAMERA_UNAVAILABLE_MESSAGE = "Unable to access camera. Please allow camera permissions and try again."


class CameraError(Exception):
    """Raised by a Camera when the device cannot be opened."""


class Camera(Protocol):
    @property
    def is_scanning(self) -> bool:
        raise NotImplementedError

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError


class ScannerSession:
    """Scanner screen for one logged-in student.

    scan-ready -> scanning -> confirm -> processing -> success | error

    Decoded frames arrive through `on_decoded`. Bad frames (wrong shape, stale or missing
    token) leave the camera running so the next frame can be tried. The camera is stopped
    before the screen leaves `scanning` for any reason.
    """

    def __init__(self, service: AttendanceService, student: StudentSession, camera: Camera):
        self._service = service
        self._student = student
        self._camera = camera
        self._reset_fields()
        self.state = ScanState.SCAN_READY

    def _reset_fields(self) -> None:
        self.ticket: Optional[ScanTicket] = None
        self.result: Optional[ScanResult] = None
        self.error: Optional[str] = None
        self.retryable = False

    def _fail(self, exc: DomainError) -> ScanState:
        self.error = str(exc)
        self.retryable = exc.retryable
        self.state = ScanState.ERROR
        return self.state

    def start(self) -> ScanState:
        if self.state is not ScanState.SCAN_READY:
            raise ValidationError(f"Cannot start scanning from {self.state.value}")
        self._reset_fields()
        try:
            self._camera.start()
        except CameraError:
            logger.warning("camera unavailable for student=%s", self._student.student_id, exc_info=True)
            self.error = CAMERA_UNAVAILABLE_MESSAGE
            return self.state
        self.state = ScanState.SCANNING
        return self.state

    def on_decoded(self, text: str, *, now_unix: Optional[float] = None) -> ScanState:
        if self.state is not ScanState.SCANNING:
            return self.state

        try:
            ticket = self._service.inspect(text, now_unix=now_unix)
        except (MalformedPayloadError, TokenInvalidError) as e:
            self.error = str(e)
            return self.state
        except (EventNotFoundError, StorageUnavailableError) as e:
            self.stop_camera()
            return self._fail(e)

        self.stop_camera()
        self.ticket = ticket
        self.error = None
        self.state = ScanState.CONFIRM
        return self.state

    def on_camera_error(self) -> ScanState:
        self.stop_camera()
        self.error = CAMERA_UNAVAILABLE_MESSAGE
        self.state = ScanState.SCAN_READY
        return self.state

    def confirm(self, *, now: Optional[datetime] = None) -> ScanState:
        if self.state is not ScanState.CONFIRM or self.ticket is None:
            raise ValidationError("There is no scanned code to confirm")

        self.state = ScanState.PROCESSING
        self.error = None
        try:
            self.result = self._service.confirm(
                self.ticket.event.event_id,
                self.ticket.attendance_type,
                self._student,
                now=now,
            )
        except DomainError as e:
            return self._fail(e)

        self.state = ScanState.SUCCESS
        return self.state

    @property
    def message(self) -> Optional[str]:
        return self.result.message if self.result else None

    def stop_camera(self) -> None:
        """Safe to call at any time, including when the camera is already stopped."""
        if self._camera.is_scanning:
            self._camera.stop()
        if self.state is ScanState.SCANNING:
            self.state = ScanState.SCAN_READY

    def reset(self) -> ScanState:
        """User acknowledged the outcome (or cancelled); back to the ready screen."""
        self.stop_camera()
        self._reset_fields()
        self.state = ScanState.SCAN_READY
        return self.state

    acknowledge = reset
