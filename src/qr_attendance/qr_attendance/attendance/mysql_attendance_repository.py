from __future__ import annotations

import uuid
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceType
from ..core.exceptions import DuplicateAttendanceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, event_id, student_id, type, timestamp, student_name, event_title"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=r["attendance_id"],
        event_id=r["event_id"],
        student_id=r["student_id"],
        type=AttendanceType(r["type"]),
        timestamp=r["timestamp"],
        student_name=r.get("student_name") or "",
        event_title=r.get("event_title") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(self, *, event_id: str, student_id: str, type: AttendanceType) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE event_id=%s AND student_id=%s AND type=%s
                """,
                (event_id, student_id, AttendanceType(type).value),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert(
        self,
        *,
        event_id: str,
        student_id: str,
        type: AttendanceType,
        student_name: str,
        event_title: str,
    ) -> str:
        attendance_type = AttendanceType(type)
        attendance_id = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # timestamp comes from the column default (database clock).
                cur.execute(
                    """
                    INSERT INTO attendance_records(attendance_id, event_id, student_id, type, student_name, event_title)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (attendance_id, event_id, student_id, attendance_type.value, student_name, event_title),
                )
        except mysql.connector.errors.IntegrityError as e:
            raise DuplicateAttendanceError(attendance_type) from e
        return attendance_id

    def list_for_event(self, event_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE event_id=%s
                ORDER BY timestamp ASC
                """,
                (event_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE student_id=%s
                ORDER BY timestamp DESC
                """,
                (student_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def delete_for_event(self, event_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE event_id=%s", (event_id,))
            return int(cur.rowcount)
