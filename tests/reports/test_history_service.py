from __future__ import annotations

from datetime import datetime

from conftest import make_event
from src.qr_attendance.qr_attendance.core.enums import AttendanceStatus, AttendanceType
from src.qr_attendance.qr_attendance.reports.history import AttendanceHistoryService


def test_history_groups_by_event(attendance_repo, events_repo):
    events_repo.events["evt2"] = make_event("evt2", title="Seminar")
    attendance_repo.add("evt1", "2024-0001", AttendanceType.SIGN_IN, datetime(2025, 3, 14, 7, 5))
    attendance_repo.add("evt1", "2024-0001", AttendanceType.SIGN_OUT, datetime(2025, 3, 14, 15, 5))
    attendance_repo.add("evt2", "2024-0001", AttendanceType.SIGN_OUT, datetime(2025, 3, 20, 12, 0))
    attendance_repo.add("evt1", "2024-0002", AttendanceType.SIGN_IN, datetime(2025, 3, 14, 7, 6))

    history = AttendanceHistoryService(attendance_repo, events_repo).for_student("2024-0001")

    by_event = {e.event_id: e for e in history.entries}
    assert by_event["evt1"].status is AttendanceStatus.COMPLETE
    assert by_event["evt2"].status is AttendanceStatus.INCOMPLETE_NO_SIGN_IN
    assert by_event["evt2"].event_title == "Seminar"
    assert (history.total, history.complete, history.incomplete) == (2, 1, 1)
    assert (history.sign_ins, history.sign_outs) == (1, 2)


def test_history_keeps_records_of_deleted_events(attendance_repo, events_repo):
    rec = attendance_repo.add("old", "2024-0001", AttendanceType.SIGN_IN, datetime(2024, 1, 1, 8, 0))
    history = AttendanceHistoryService(attendance_repo, events_repo).for_student("2024-0001")

    [entry] = history.entries
    assert entry.event is None
    assert entry.event_title == rec.event_title
    assert entry.status is AttendanceStatus.INCOMPLETE_NO_SIGN_OUT


def test_empty_history(attendance_repo, events_repo):
    data = AttendanceHistoryService(attendance_repo, events_repo).for_student("2024-0001").to_dict()
    assert data == {
        "records": [],
        "stats": {"total": 0, "complete": 0, "incomplete": 0, "signIns": 0, "signOuts": 0},
    }
