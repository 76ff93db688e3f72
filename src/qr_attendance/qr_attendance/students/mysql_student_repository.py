from __future__ import annotations

import uuid
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import ApprovalStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewStudent, Student
from .repository import StudentRepository

_COLUMNS = "uid, student_id, first_name, last_name, middle_name, course, year_level, section, approval_status"


def _to_student(r: dict) -> Student:
    return Student(
        uid=r["uid"],
        student_id=r["student_id"],
        first_name=r["first_name"],
        last_name=r["last_name"],
        middle_name=r.get("middle_name"),
        course=r.get("course"),
        year_level=r.get("year_level"),
        section=r.get("section"),
        approval_status=ApprovalStatus(r["approval_status"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_uid(self, uid: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE uid=%s", (uid,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_student_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_roster(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY last_name ASC, first_name ASC")
            return [_to_student(r) for r in fetchall(cur)]

    def list_by_status(self, status: ApprovalStatus) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE approval_status=%s ORDER BY created_at ASC",
                (ApprovalStatus(status).value,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def create(self, data: NewStudent) -> str:
        uid = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO students(
                        uid, student_id, first_name, last_name, middle_name,
                        course, year_level, section, approval_status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        uid,
                        data.student_id,
                        data.first_name,
                        data.last_name,
                        data.middle_name,
                        data.course,
                        data.year_level,
                        data.section,
                        data.approval_status.value,
                    ),
                )
        except mysql.connector.errors.IntegrityError as e:
            raise ValidationError("Student ID already exists") from e
        return uid

    def set_approval_status(self, uid: str, status: ApprovalStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET approval_status=%s WHERE uid=%s",
                (ApprovalStatus(status).value, uid),
            )
            return cur.rowcount > 0

    def delete(self, uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE uid=%s", (uid,))
            return cur.rowcount > 0
