from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

import pytest

from src.qr_attendance.qr_attendance.attendance.model import AttendanceRecord
from src.qr_attendance.qr_attendance.core.enums import ApprovalStatus, AttendanceType, EventStatus
from src.qr_attendance.qr_attendance.core.exceptions import DuplicateAttendanceError, ValidationError
from src.qr_attendance.qr_attendance.events.model import Event, NewEvent
from src.qr_attendance.qr_attendance.students.model import NewStudent, Student

EVENT_DAY = date(2025, 3, 14)


class InMemoryEvents:
    def __init__(self, events: Optional[list[Event]] = None):
        self.events: dict[str, Event] = {e.event_id: e for e in (events or [])}
        self.get_calls = 0

    def get_by_id(self, event_id: str) -> Optional[Event]:
        self.get_calls += 1
        return self.events.get(event_id)

    def list_all(self):
        return sorted(self.events.values(), key=lambda e: e.event_date, reverse=True)

    def create(self, data: NewEvent) -> str:
        event_id = uuid.uuid4().hex
        self.events[event_id] = Event(event_id=event_id, **vars(data))
        return event_id

    def update(self, event_id: str, data: NewEvent) -> bool:
        if event_id not in self.events:
            return False
        self.events[event_id] = Event(event_id=event_id, **vars(data))
        return True

    def delete(self, event_id: str) -> bool:
        return self.events.pop(event_id, None) is not None


class InMemoryStudents:
    def __init__(self, students: Optional[list[Student]] = None):
        self.students: dict[str, Student] = {s.uid: s for s in (students or [])}

    def get_by_uid(self, uid: str) -> Optional[Student]:
        return self.students.get(uid)

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students.values() if s.student_id == student_id), None)

    def list_roster(self):
        return sorted(self.students.values(), key=lambda s: (s.last_name, s.first_name))

    def list_by_status(self, status: ApprovalStatus):
        return [s for s in self.students.values() if s.approval_status == status]

    def create(self, data: NewStudent) -> str:
        if self.get_by_student_id(data.student_id):
            raise ValidationError("Student ID already exists")
        uid = uuid.uuid4().hex
        self.students[uid] = Student(uid=uid, **vars(data))
        return uid

    def set_approval_status(self, uid: str, status: ApprovalStatus) -> bool:
        s = self.students.get(uid)
        if not s:
            return False
        self.students[uid] = Student(**{**vars(s), "approval_status": status})
        return True

    def delete(self, uid: str) -> bool:
        return self.students.pop(uid, None) is not None


class InMemoryAttendance:
    """Enforces the (event, student, type) unique key like the real table does."""

    def __init__(self, clock=None):
        self.records: list[AttendanceRecord] = []
        self.clock = clock or (lambda: datetime(2025, 3, 14, 8, 0))
        self.skip_find = False

    def find(self, *, event_id: str, student_id: str, type: AttendanceType):
        if self.skip_find:
            return None
        return next(
            (r for r in self.records if (r.event_id, r.student_id, r.type) == (event_id, student_id, type)),
            None,
        )

    def insert(self, *, event_id, student_id, type, student_name, event_title) -> str:
        if any((r.event_id, r.student_id, r.type) == (event_id, student_id, type) for r in self.records):
            raise DuplicateAttendanceError(type)
        rec = AttendanceRecord(
            attendance_id=uuid.uuid4().hex,
            event_id=event_id,
            student_id=student_id,
            type=type,
            timestamp=self.clock(),
            student_name=student_name,
            event_title=event_title,
        )
        self.records.append(rec)
        return rec.attendance_id

    def add(self, event_id: str, student_id: str, type: AttendanceType, timestamp: datetime) -> AttendanceRecord:
        rec = AttendanceRecord(
            attendance_id=uuid.uuid4().hex,
            event_id=event_id,
            student_id=student_id,
            type=type,
            timestamp=timestamp,
        )
        self.records.append(rec)
        return rec

    def list_for_event(self, event_id: str):
        return sorted((r for r in self.records if r.event_id == event_id), key=lambda r: r.timestamp)

    def list_for_student(self, student_id: str):
        return sorted((r for r in self.records if r.student_id == student_id), key=lambda r: r.timestamp, reverse=True)

    def delete_for_event(self, event_id: str) -> int:
        before = len(self.records)
        self.records = [r for r in self.records if r.event_id != event_id]
        return before - len(self.records)


def make_event(event_id: str = "evt1", **overrides) -> Event:
    fields = dict(
        event_id=event_id,
        title="General Assembly",
        event_date=EVENT_DAY,
        venue="Gym",
        sign_in_start="07:00",
        sign_in_end="09:00",
        sign_out_start="15:00",
        sign_out_end="17:00",
        grace_period_minutes=15,
        status=EventStatus.ONGOING,
    )
    fields.update(overrides)
    return Event(**fields)


def make_student(student_id: str, first: str, last: str, **overrides) -> Student:
    fields = dict(
        uid=f"uid-{student_id}",
        student_id=student_id,
        first_name=first,
        last_name=last,
        course="BSIT",
        year_level="3",
        section="A",
        approval_status=ApprovalStatus.APPROVED,
    )
    fields.update(overrides)
    return Student(**fields)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 8, 5)


@pytest.fixture
def event() -> Event:
    return make_event()


@pytest.fixture
def events_repo(event) -> InMemoryEvents:
    return InMemoryEvents([event])


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents(
        [
            make_student("2024-0001", "Maria", "Santos"),
            make_student("2024-0002", "Juan", "Dela Cruz", course="BSCS"),
            make_student("2024-0003", "Ana", "Garcia"),
            make_student("2024-0004", "Paolo", "Mendoza", approval_status=ApprovalStatus.PENDING),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()
