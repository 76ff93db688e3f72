from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StorageUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Connection-level failures: the request may succeed if sent again.
_UNAVAILABLE_ERRORS = (mysql.connector.errors.InterfaceError, mysql.connector.errors.OperationalError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except _UNAVAILABLE_ERRORS as e:
        logger.warning("database unreachable: %s", e)
        raise StorageUnavailableError() from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _UNAVAILABLE_ERRORS as e:
        _safe_rollback(conn)
        logger.warning("database round-trip failed: %s", e)
        raise StorageUnavailableError() from e
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except _UNAVAILABLE_ERRORS:
        # The connection is already gone; there is nothing left to roll back.
        logger.debug("rollback skipped, connection lost")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or ())


def normalize_mysql_hhmm(value: Any) -> Optional[str]:
    """Render a TIME column as `HH:MM`.

    Depending on the connector build the value arrives as `time`, as `timedelta`
    (seconds since midnight) or as text like '08:30:00'. Seconds are dropped.
    """
    if value is None:
        return None
    if isinstance(value, time):
        hours, minutes = value.hour, value.minute
    elif isinstance(value, timedelta):
        hours, rest = divmod(int(value.total_seconds()) % 86400, 3600)
        minutes = rest // 60
    elif isinstance(value, str):
        hh, sep, tail = value.strip().partition(":")
        if not sep:
            raise ValueError(f"not a TIME value: {value!r}")
        hours, minutes = int(hh), int(tail.split(":")[0])
    else:
        raise TypeError(f"unexpected TIME value {type(value).__name__}")
    return f"{hours:02d}:{minutes:02d}"
