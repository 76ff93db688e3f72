from __future__ import annotations

from datetime import datetime

import pytest

from conftest import make_event
from src.qr_attendance.qr_attendance.core.enums import AttendanceType
from src.qr_attendance.qr_attendance.core.exceptions import (
    EventNotTodayError,
    TimeWindowError,
    WindowClosedError,
    WindowNotOpenError,
)
from src.qr_attendance.qr_attendance.events.window import AttendanceWindowEvaluator

SIGN_IN = AttendanceType.SIGN_IN
SIGN_OUT = AttendanceType.SIGN_OUT


@pytest.fixture
def evaluator():
    return AttendanceWindowEvaluator()


@pytest.mark.parametrize(
    "hhmm, attendance_type",
    [("07:00", SIGN_IN), ("08:30", SIGN_IN), ("09:00", SIGN_IN), ("15:00", SIGN_OUT), ("17:00", SIGN_OUT)],
)
def test_inside_window_is_admitted(evaluator, event, hhmm, attendance_type):
    h, m = map(int, hhmm.split(":"))
    evaluator.check(event, attendance_type, now=datetime(2025, 3, 14, h, m, 59))


def test_before_sign_in_start(evaluator, event):
    with pytest.raises(WindowNotOpenError) as exc:
        evaluator.check(event, SIGN_IN, now=datetime(2025, 3, 14, 6, 59))
    assert str(exc.value) == "Sign-in starts at 07:00"
    assert exc.value.boundary == "07:00"


def test_after_sign_in_end(evaluator, event):
    with pytest.raises(WindowClosedError) as exc:
        evaluator.check(event, SIGN_IN, now=datetime(2025, 3, 14, 9, 1))
    assert str(exc.value) == "Sign-in ended at 09:00"


def test_sign_out_uses_its_own_window(evaluator, event):
    with pytest.raises(WindowNotOpenError) as exc:
        evaluator.check(event, SIGN_OUT, now=datetime(2025, 3, 14, 8, 0))
    assert str(exc.value) == "Sign-out starts at 15:00"

    with pytest.raises(WindowClosedError) as exc:
        evaluator.check(event, SIGN_OUT, now=datetime(2025, 3, 14, 17, 1))
    assert str(exc.value) == "Sign-out ended at 17:00"


def test_event_in_future(evaluator, event):
    with pytest.raises(EventNotTodayError) as exc:
        evaluator.check(event, SIGN_IN, now=datetime(2025, 3, 13, 8, 0))
    assert exc.value.not_started is True
    assert str(exc.value) == "This event has not started yet"


def test_event_in_past(evaluator, event):
    with pytest.raises(EventNotTodayError) as exc:
        evaluator.check(event, SIGN_IN, now=datetime(2025, 3, 15, 8, 0))
    assert exc.value.not_started is False
    assert str(exc.value) == "This event has already ended"


def test_all_window_failures_share_a_kind(evaluator):
    event = make_event(sign_in_start="10:00", sign_in_end="11:00")
    with pytest.raises(TimeWindowError):
        evaluator.check(event, SIGN_IN, now=datetime(2025, 3, 14, 8, 0))


def test_lateness_does_not_block_admission(evaluator, event):
    # 08:30 is past the 07:15 grace deadline but still inside the window.
    evaluator.check(event, SIGN_IN, now=datetime(2025, 3, 14, 8, 30))
