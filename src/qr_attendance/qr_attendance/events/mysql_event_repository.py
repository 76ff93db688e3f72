from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import EventStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_hhmm
from .model import Event, NewEvent
from .repository import EventRepository

_COLUMNS = """
    event_id, title, description, event_date, venue,
    sign_in_start, sign_in_end, sign_out_start, sign_out_end,
    grace_period_minutes, status
"""


def _to_event(r: dict) -> Event:
    return Event(
        event_id=r["event_id"],
        title=r["title"],
        event_date=r["event_date"],
        venue=r["venue"],
        sign_in_start=normalize_mysql_hhmm(r["sign_in_start"]),
        sign_in_end=normalize_mysql_hhmm(r["sign_in_end"]),
        sign_out_start=normalize_mysql_hhmm(r["sign_out_start"]),
        sign_out_end=normalize_mysql_hhmm(r["sign_out_end"]),
        grace_period_minutes=int(r["grace_period_minutes"]),
        status=EventStatus(r["status"]),
        description=r.get("description"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (event_id,))
            r = fetchone(cur)
            return _to_event(r) if r else None

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY event_date DESC")
            return [_to_event(r) for r in fetchall(cur)]

    def create(self, data: NewEvent) -> str:
        event_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(
                    event_id, title, description, event_date, venue,
                    sign_in_start, sign_in_end, sign_out_start, sign_out_end,
                    grace_period_minutes, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    event_id,
                    data.title,
                    data.description,
                    data.event_date,
                    data.venue,
                    data.sign_in_start,
                    data.sign_in_end,
                    data.sign_out_start,
                    data.sign_out_end,
                    data.grace_period_minutes,
                    data.status.value,
                ),
            )
        return event_id

    def update(self, event_id: str, data: NewEvent) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, description=%s, event_date=%s, venue=%s,
                    sign_in_start=%s, sign_in_end=%s, sign_out_start=%s, sign_out_end=%s,
                    grace_period_minutes=%s, status=%s
                WHERE event_id=%s
                """,
                (
                    data.title,
                    data.description,
                    data.event_date,
                    data.venue,
                    data.sign_in_start,
                    data.sign_in_end,
                    data.sign_out_start,
                    data.sign_out_end,
                    data.grace_period_minutes,
                    data.status.value,
                    event_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=%s", (event_id,))
            return cur.rowcount > 0
