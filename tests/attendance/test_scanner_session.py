from __future__ import annotations

from datetime import datetime

import pytest

from src.qr_attendance.qr_attendance.attendance.scanner import CAMERA_UNAVAILABLE_MESSAGE, CameraError, ScannerSession
from src.qr_attendance.qr_attendance.attendance.service import AttendanceService
from src.qr_attendance.qr_attendance.core.enums import AttendanceType, ScanState
from src.qr_attendance.qr_attendance.core.exceptions import StorageUnavailableError, ValidationError
from src.qr_attendance.qr_attendance.students.service import StudentAuthService
from src.qr_attendance.qr_attendance.tokens.generator import TimeSlotTokenGenerator
from src.qr_attendance.qr_attendance.tokens.payload import encode_payload
from src.qr_attendance.qr_attendance.tokens.validator import TokenValidator

NOW_UNIX = 1_741_939_500.0
IN_WINDOW = datetime(2025, 3, 14, 8, 5)


class FakeCamera:
    def __init__(self, fail_on_start=False):
        self.is_scanning = False
        self.fail_on_start = fail_on_start
        self.stops = 0

    def start(self):
        if self.fail_on_start:
            raise CameraError("permission denied")
        self.is_scanning = True

    def stop(self):
        if not self.is_scanning:
            raise AssertionError("stop() called on a stopped camera")
        self.is_scanning = False
        self.stops += 1


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def scanner(events_repo, attendance_repo, students_repo, camera, fixed_now):
    service = AttendanceService(events_repo, attendance_repo, validator=TokenValidator(window_seconds=30))
    student = StudentAuthService(students_repo).login("2024-0001", now=fixed_now)
    return ScannerSession(service, student, camera)


def _code(event_id="evt1", at=NOW_UNIX):
    gen = TimeSlotTokenGenerator(window_seconds=30)
    return encode_payload(gen.generate(event_id, AttendanceType.SIGN_IN, now_unix=at))


def test_happy_path(scanner, camera, attendance_repo):
    assert scanner.state is ScanState.SCAN_READY
    assert scanner.start() is ScanState.SCANNING
    assert camera.is_scanning

    assert scanner.on_decoded(_code(), now_unix=NOW_UNIX + 3) is ScanState.CONFIRM
    assert not camera.is_scanning
    assert scanner.ticket.event.title == "General Assembly"

    assert scanner.confirm(now=IN_WINDOW) is ScanState.SUCCESS
    assert scanner.message == "Sign-In successful!"
    assert len(attendance_repo.records) == 1


def test_stale_token_keeps_camera_running(scanner, camera):
    scanner.start()
    state = scanner.on_decoded(_code(at=NOW_UNIX - 300), now_unix=NOW_UNIX)

    assert state is ScanState.SCANNING
    assert camera.is_scanning
    assert "expired" in scanner.error

    # next good frame still goes through
    assert scanner.on_decoded(_code(), now_unix=NOW_UNIX) is ScanState.CONFIRM


def test_malformed_frame_keeps_camera_running(scanner, camera):
    scanner.start()
    assert scanner.on_decoded("WIFI:S:guest;;", now_unix=NOW_UNIX) is ScanState.SCANNING
    assert camera.is_scanning
    assert scanner.error == "Invalid QR code. Please scan a valid event QR code."


@pytest.mark.parametrize("ts", ["NaN", "Infinity", "1e400"])
def test_non_finite_ts_is_malformed_and_camera_keeps_running(scanner, camera, ts):
    scanner.start()
    frame = '{"eventId":"evt1","type":"sign-in","token":"x","ts":' + ts + "}"
    assert scanner.on_decoded(frame, now_unix=NOW_UNIX) is ScanState.SCANNING
    assert camera.is_scanning
    assert scanner.error == "Invalid QR code. Please scan a valid event QR code."


def test_unknown_event_stops_camera(scanner, camera):
    scanner.start()
    assert scanner.on_decoded(_code(event_id="ghost"), now_unix=NOW_UNIX) is ScanState.ERROR
    assert not camera.is_scanning
    assert scanner.error == "Event not found"
    assert scanner.retryable is False


def test_storage_outage_is_retryable(scanner, camera, events_repo, monkeypatch):
    def boom(event_id):
        raise StorageUnavailableError()

    monkeypatch.setattr(events_repo, "get_by_id", boom)
    scanner.start()

    assert scanner.on_decoded(_code(), now_unix=NOW_UNIX) is ScanState.ERROR
    assert scanner.retryable is True
    assert not camera.is_scanning


def test_window_rejection_then_acknowledge(scanner, camera):
    scanner.start()
    scanner.on_decoded(_code(), now_unix=NOW_UNIX)

    assert scanner.confirm(now=datetime(2025, 3, 14, 10, 0)) is ScanState.ERROR
    assert scanner.error == "Sign-in ended at 09:00"

    assert scanner.acknowledge() is ScanState.SCAN_READY
    assert scanner.error is None and scanner.ticket is None


def test_duplicate_is_terminal(scanner):
    for expected in (ScanState.SUCCESS, ScanState.ERROR):
        scanner.start()
        scanner.on_decoded(_code(), now_unix=NOW_UNIX)
        assert scanner.confirm(now=IN_WINDOW) is expected
        scanner.reset()
    assert scanner.state is ScanState.SCAN_READY


def test_frames_ignored_unless_scanning(scanner):
    assert scanner.on_decoded(_code(), now_unix=NOW_UNIX) is ScanState.SCAN_READY
    assert scanner.ticket is None


def test_stop_camera_is_idempotent(scanner, camera):
    scanner.stop_camera()
    scanner.start()
    scanner.stop_camera()
    scanner.stop_camera()
    assert camera.stops == 1
    assert scanner.state is ScanState.SCAN_READY


def test_camera_failure_stays_ready(events_repo, attendance_repo, students_repo, fixed_now):
    service = AttendanceService(events_repo, attendance_repo, validator=TokenValidator(window_seconds=30))
    student = StudentAuthService(students_repo).login("2024-0001", now=fixed_now)
    scanner = ScannerSession(service, student, FakeCamera(fail_on_start=True))

    assert scanner.start() is ScanState.SCAN_READY
    assert scanner.error == CAMERA_UNAVAILABLE_MESSAGE


def test_camera_error_mid_scan(scanner, camera):
    scanner.start()
    camera.is_scanning = False
    assert scanner.on_camera_error() is ScanState.SCAN_READY
    assert scanner.error == CAMERA_UNAVAILABLE_MESSAGE


def test_confirm_without_ticket(scanner):
    with pytest.raises(ValidationError):
        scanner.confirm()


def test_start_twice_is_rejected(scanner):
    scanner.start()
    with pytest.raises(ValidationError):
        scanner.start()
