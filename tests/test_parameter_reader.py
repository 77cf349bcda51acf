import struct

import pytest

from colavision.cola_command import CoLaCommand
from colavision.parameter_reader import CoLaParameterReader

HEADER = b"sRA var "


def reader_for(payload: bytes) -> CoLaParameterReader:
    return CoLaParameterReader(CoLaCommand(HEADER + payload))


def test_reads_integers_in_sequence():
    payload = struct.pack(">bBhHiI", -5, 200, -1234, 54321, -70000, 4000000000)
    r = reader_for(payload)
    assert r.read_sint() == -5
    assert r.read_usint() == 200
    assert r.read_int() == -1234
    assert r.read_uint() == 54321
    assert r.read_dint() == -70000
    assert r.read_udint() == 4000000000
    assert r.position == len(HEADER) + len(payload)


def test_big_endian_wire_order():
    r = reader_for(b"\x01\x02")
    assert r.read_uint() == 0x0102


def test_reads_floats():
    r = reader_for(struct.pack(">fd", 1.5, -2.25))
    assert r.read_real() == 1.5
    assert r.read_lreal() == -2.25


def test_read_bool_only_one_is_true():
    r = reader_for(b"\x01\x00\x02")
    assert r.read_bool() is True
    assert r.read_bool() is False
    assert r.read_bool() is False


def test_flex_string():
    r = reader_for(struct.pack(">H", 5) + b"hello" + b"\x07")
    assert r.read_flex_string() == "hello"
    assert r.read_usint() == 7


def test_fixed_string_zero_length_does_not_move():
    r = reader_for(b"ab")
    start = r.position
    assert r.read_fixed_string(0) == ""
    assert r.position == start
    assert r.read_fixed_string(2) == "ab"


def test_rewind_returns_to_first_parameter():
    r = reader_for(b"\x2a\x2b")
    first = r.read_usint()
    r.read_usint()
    r.rewind()
    assert r.position == len(HEADER)
    assert r.read_usint() == first


@pytest.mark.parametrize(
    "method",
    ["read_sint", "read_usint", "read_int", "read_uint", "read_dint",
     "read_udint", "read_real", "read_lreal", "read_bool", "read_flex_string"],
)
def test_reading_past_end_raises(method):
    r = reader_for(b"")
    with pytest.raises(IndexError):
        getattr(r, method)()
    assert r.position == len(HEADER)


def test_partial_value_raises_and_keeps_position():
    r = reader_for(b"\x00\x01\x02")
    with pytest.raises(IndexError):
        r.read_udint()
    assert r.position == len(HEADER)


def test_fixed_string_too_long_raises():
    r = reader_for(b"abc")
    with pytest.raises(IndexError):
        r.read_fixed_string(4)
    assert r.read_fixed_string(3) == "abc"


def test_flex_string_length_exceeds_buffer():
    r = reader_for(struct.pack(">H", 10) + b"abc")
    with pytest.raises(IndexError):
        r.read_flex_string()


def test_error_telegram_reader_starts_at_code():
    r = CoLaParameterReader(CoLaCommand(b"sFA\x00\x05"))
    assert r.read_uint() == 5