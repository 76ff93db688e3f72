from __future__ import annotations

import pytest

from src.qr_attendance.qr_attendance.core.enums import AttendanceType
from src.qr_attendance.qr_attendance.tokens.generator import TimeSlotTokenGenerator, encode_slot, slot_at


@pytest.mark.parametrize(
    "slot, expected",
    [(0, "0"), (9, "9"), (10, "a"), (35, "z"), (36, "10"), (1295, "zz"), (56666667, "xqka3")],
)
def test_encode_slot_is_lowercase_base36(slot, expected):
    assert encode_slot(slot) == expected


def test_slot_boundaries_use_floor():
    assert slot_at(1079.999, 30) == 35
    assert slot_at(1080, 30) == 36
    assert slot_at(-1, 30) == -1


def test_generate_stamps_token_and_millisecond_ts():
    gen = TimeSlotTokenGenerator(window_seconds=30)
    payload = gen.generate("evt1", AttendanceType.SIGN_IN, now_unix=1080.5)

    assert payload.event_id == "evt1"
    assert payload.type is AttendanceType.SIGN_IN
    assert payload.token == "10"
    assert payload.ts == 1080500


def test_same_slot_gives_same_token_and_next_slot_differs():
    gen = TimeSlotTokenGenerator(window_seconds=30)
    assert gen.token_at(1080) == gen.token_at(1109.9)
    assert gen.token_at(1110) != gen.token_at(1109.9)


def test_generator_reads_injected_clock():
    gen = TimeSlotTokenGenerator(window_seconds=30, clock=lambda: 1050.0)
    assert gen.generate("e", AttendanceType.SIGN_OUT).token == "z"


def test_countdown_reports_seconds_to_next_boundary():
    gen = TimeSlotTokenGenerator(window_seconds=30)

    c = gen.countdown(now_unix=1085.7)
    assert c.slot == 36
    assert c.next_boundary == 1110
    assert c.seconds_remaining == 25

    assert gen.countdown(now_unix=1080).seconds_remaining == 30


def test_rejects_non_positive_window():
    with pytest.raises(ValueError):
        TimeSlotTokenGenerator(window_seconds=0)


def test_snapshot_reads_the_clock_once_at_a_slot_boundary():
    reads = iter([1109.9, 1110.1])
    gen = TimeSlotTokenGenerator(window_seconds=30, clock=lambda: next(reads))

    payload, countdown = gen.snapshot("evt1", AttendanceType.SIGN_IN)

    assert payload.token == encode_slot(36)
    assert countdown.slot == 36
    assert countdown.seconds_remaining == 1
    # second reading still unused
    assert next(reads) == 1110.1
