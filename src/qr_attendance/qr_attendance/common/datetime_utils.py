from __future__ import annotations

import re
import time
from datetime import date, datetime, timedelta

_HHMM_RE = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_unix() -> float:
    """Current wall-clock time in seconds since the epoch."""
    return time.time()


def is_canonical_hhmm(value: str) -> bool:
    """True for zero-padded 24h `HH:MM` text, the only form that sorts correctly as a string."""
    return bool(value) and bool(_HHMM_RE.match(value))


def to_hhmm(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def combine_hhmm(day: date, hhmm: str) -> datetime:
    hours, minutes = hhmm.split(":")
    return datetime(day.year, day.month, day.day) + timedelta(hours=int(hours), minutes=int(minutes))
