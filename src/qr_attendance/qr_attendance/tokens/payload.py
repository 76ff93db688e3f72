"""QR payload wire format.

The symbol carries a compact JSON object:

    {"eventId": str, "type": "sign-in" | "sign-out", "token": str, "ts": number(ms)}

Decoding never raises; it returns a tagged result (`ValidPayload` or `MalformedPayload`)
so the scanner can tell a structurally broken symbol apart from a stale token.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import AttendanceType
from ..core.exceptions import MalformedPayloadError


@dataclass(frozen=True)
class QRPayload:
    event_id: str
    type: AttendanceType
    token: Optional[str]
    ts: Optional[int]

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "type": self.type.value,
            "token": self.token,
            "ts": self.ts,
        }


@dataclass(frozen=True)
class ValidPayload:
    payload: QRPayload
    is_valid: bool = True


@dataclass(frozen=True)
class MalformedPayload:
    reason: str
    is_valid: bool = False


DecodedPayload = Union[ValidPayload, MalformedPayload]


def encode_payload(payload: QRPayload) -> str:
    return json.dumps(payload.to_dict(), separators=(",", ":"))


def _is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    # json.loads turns NaN, Infinity and 1e400 into floats that int() cannot take
    return isinstance(value, float) and math.isfinite(value)


def decode_payload(text: str) -> DecodedPayload:
    """Strictly decode scanned text.

    A missing or empty `token`/`ts` is still a well-formed payload: the token check
    reports it as a missing token rather than a malformed symbol.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return MalformedPayload("not JSON")

    if not isinstance(data, dict):
        return MalformedPayload("not a JSON object")

    event_id = data.get("eventId")
    if not isinstance(event_id, str) or not event_id.strip():
        return MalformedPayload("missing eventId")

    try:
        attendance_type = AttendanceType(data.get("type"))
    except ValueError:
        return MalformedPayload("unknown type")

    token = data.get("token")
    if token is not None and not isinstance(token, str):
        return MalformedPayload("token is not a string")

    ts = data.get("ts")
    if ts is not None and not _is_number(ts):
        return MalformedPayload("ts is not a number")

    return ValidPayload(
        QRPayload(
            event_id=event_id.strip(),
            type=attendance_type,
            token=token,
            ts=int(ts) if ts is not None else None,
        )
    )


def require_valid(decoded: DecodedPayload) -> QRPayload:
    if isinstance(decoded, MalformedPayload):
        raise MalformedPayloadError()
    return decoded.payload
