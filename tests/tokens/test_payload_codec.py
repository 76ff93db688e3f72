from __future__ import annotations

import json

import pytest

from src.qr_attendance.qr_attendance.core.enums import AttendanceType
from src.qr_attendance.qr_attendance.core.exceptions import MalformedPayloadError
from src.qr_attendance.qr_attendance.tokens.payload import (
    MalformedPayload,
    QRPayload,
    ValidPayload,
    decode_payload,
    encode_payload,
    require_valid,
)


def test_encoded_payload_uses_wire_field_names():
    text = encode_payload(QRPayload(event_id="evt1", type=AttendanceType.SIGN_OUT, token="10", ts=1080000))
    assert json.loads(text) == {"eventId": "evt1", "type": "sign-out", "token": "10", "ts": 1080000}
    assert " " not in text


def test_decode_valid_payload():
    decoded = decode_payload('{"eventId":"evt1","type":"sign-in","token":"z","ts":1079000.0}')
    assert isinstance(decoded, ValidPayload)
    assert decoded.payload == QRPayload(event_id="evt1", type=AttendanceType.SIGN_IN, token="z", ts=1079000)


def test_missing_token_and_ts_still_decode():
    decoded = decode_payload('{"eventId":"evt1","type":"sign-in"}')
    assert decoded.is_valid
    assert decoded.payload.token is None
    assert decoded.payload.ts is None


@pytest.mark.parametrize(
    "text",
    [
        "hello",
        "",
        "[1,2]",
        '{"type":"sign-in","token":"z","ts":1}',
        '{"eventId":"  ","type":"sign-in"}',
        '{"eventId":"evt1","type":"check-in"}',
        '{"eventId":"evt1","type":"sign-in","token":12}',
        '{"eventId":"evt1","type":"sign-in","token":"z","ts":"1079000"}',
        '{"eventId":"evt1","type":"sign-in","token":"z","ts":true}',
        '{"eventId":"evt1","type":"sign-in","token":"z","ts":NaN}',
        '{"eventId":"evt1","type":"sign-in","token":"z","ts":Infinity}',
        '{"eventId":"evt1","type":"sign-in","token":"z","ts":-Infinity}',
        '{"eventId":"evt1","type":"sign-in","token":"z","ts":1e400}',
    ],
)
def test_structurally_invalid_text_is_malformed(text):
    decoded = decode_payload(text)
    assert isinstance(decoded, MalformedPayload)
    assert decoded.is_valid is False


def test_require_valid_raises_for_malformed():
    with pytest.raises(MalformedPayloadError):
        require_valid(decode_payload("not json"))
