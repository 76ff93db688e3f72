from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.recorder import AttendanceRecorder
from .attendance.service import AttendanceService
from .core.constants import QR_REDRAW_SECONDS, QR_VALIDITY_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .events.window import AttendanceWindowEvaluator
from .reports.history import AttendanceHistoryService
from .reports.service import AttendanceSummaryService
from .staff.service import StaffAccount, StaffAuthService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentAuthService, StudentService
from .tokens.generator import TimeSlotTokenGenerator
from .tokens.validator import TokenValidator


@dataclass(frozen=True)
class Container:
    events_repo: EventRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    token_generator: TimeSlotTokenGenerator
    token_validator: TokenValidator
    redraw_seconds: int

    staff_auth_service: StaffAuthService
    student_auth_service: StudentAuthService
    student_service: StudentService
    event_service: EventService
    attendance_service: AttendanceService
    summary_service: AttendanceSummaryService
    history_service: AttendanceHistoryService


def build_services(
    *,
    events_repo: EventRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    staff_account: StaffAccount,
    qr_validity_seconds: int = QR_VALIDITY_SECONDS,
    qr_redraw_seconds: int = QR_REDRAW_SECONDS,
) -> Container:
    """Wire services over any repository implementation (MySQL in the app, in-memory in tests)."""

    # Display and scanner must share the same slot width.
    token_generator = TimeSlotTokenGenerator(window_seconds=qr_validity_seconds)
    token_validator = TokenValidator(window_seconds=qr_validity_seconds)

    attendance_service = AttendanceService(
        events_repo,
        attendance_repo,
        validator=token_validator,
        window_evaluator=AttendanceWindowEvaluator(),
        recorder=AttendanceRecorder(attendance_repo),
    )

    return Container(
        events_repo=events_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        token_generator=token_generator,
        token_validator=token_validator,
        redraw_seconds=int(qr_redraw_seconds),
        staff_auth_service=StaffAuthService(staff_account),
        student_auth_service=StudentAuthService(students_repo),
        student_service=StudentService(students_repo),
        event_service=EventService(events_repo, attendance_repo),
        attendance_service=attendance_service,
        summary_service=AttendanceSummaryService(students_repo, attendance_repo, events_repo),
        history_service=AttendanceHistoryService(attendance_repo, events_repo),
    )


def build_container(
    *,
    db_config: dict,
    staff_account: StaffAccount,
    qr_validity_seconds: int = QR_VALIDITY_SECONDS,
    qr_redraw_seconds: int = QR_REDRAW_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        events_repo=MySQLEventRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        staff_account=staff_account,
        qr_validity_seconds=qr_validity_seconds,
        qr_redraw_seconds=qr_redraw_seconds,
    )
