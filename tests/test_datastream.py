import math
import struct

import pytest

from perfstream.datastream import DataStreamReader, StreamError


def reader(data, version=17):
    return DataStreamReader(data, version)


def test_integers_are_big_endian():
    r = reader(b"\x00\x00\x00\x01" + b"\xff\xff\xff\xff")
    assert r.read_uint32() == 1
    assert r.read_int32() == -1
    assert r.at_end()


def test_int8_and_uint8():
    r = reader(b"\xff\xff")
    assert r.read_int8() == -1
    assert r.read_uint8() == 255


@pytest.mark.parametrize("value", [0, 1, 2**63 - 1, -(2**63)])
def test_int64_round_trip(value):
    r = reader(struct.pack(">q", value))
    assert r.read_int64() == value


@pytest.mark.parametrize("value", [0, 1_000_000_000, 2**64 - 1])
def test_uint64_round_trip(value):
    r = reader(struct.pack(">Q", value))
    assert r.read_uint64() == value


def test_bool_is_nonzero_byte():
    r = reader(b"\x00\x01\x07")
    assert r.read_bool() is False
    assert r.read_bool() is True
    assert r.read_bool() is True


def test_float_as_double_in_new_versions():
    r = reader(struct.pack(">d", 0.5), version=17)
    assert r.read_float() == 0.5
    assert r.at_end()


def test_float_as_single_in_old_versions():
    r = reader(struct.pack(">f", 0.25), version=11)
    assert r.read_float() == 0.25
    assert r.at_end()


def test_float_overflow_becomes_infinity():
    r = reader(struct.pack(">d", -1e300))
    result = r.read_float()
    assert math.isinf(result) and result < 0


def test_bytes_round_trip():
    payload = b"hello"
    r = reader(struct.pack(">I", len(payload)) + payload)
    assert r.read_bytes() == payload
    assert r.at_end()


def test_null_bytes_reads_empty():
    r = reader(b"\xff\xff\xff\xff")
    assert r.read_bytes() == b""
    assert r.at_end()


def test_string_utf16_round_trip():
    text = "sched:sched_switch ü"
    encoded = text.encode("utf-16-be")
    r = reader(struct.pack(">I", len(encoded)) + encoded)
    assert r.read_string() == text


def test_null_string_reads_empty():
    r = reader(b"\xff\xff\xff\xff")
    assert r.read_string() == ""


def test_odd_string_length_is_corrupt():
    r = reader(struct.pack(">I", 3) + b"abc")
    with pytest.raises(StreamError):
        r.read_string()


def test_list_of_ints():
    values = [3, -4, 5]
    data = struct.pack(">I", len(values)) + b"".join(struct.pack(">i", v) for v in values)
    r = reader(data)
    assert r.read_list(DataStreamReader.read_int32) == values
    assert r.at_end()


def test_list_of_byte_arrays():
    items = [b"perf", b"record"]
    data = struct.pack(">I", len(items))
    for item in items:
        data += struct.pack(">I", len(item)) + item
    r = reader(data)
    assert r.read_list(lambda s: s.read_bytes()) == items


def test_empty_list():
    r = reader(struct.pack(">I", 0))
    assert r.read_list(DataStreamReader.read_int32) == []
    assert r.at_end()


def test_read_past_end_raises():
    r = reader(b"\x00\x01")
    with pytest.raises(StreamError):
        r.read_uint32()


def test_truncated_bytes_raises():
    r = reader(struct.pack(">I", 10) + b"abc")
    with pytest.raises(StreamError):
        r.read_bytes()


def test_truncated_list_raises():
    r = reader(struct.pack(">I", 2) + struct.pack(">i", 1))
    with pytest.raises(StreamError):
        r.read_list(DataStreamReader.read_int32)


def test_at_end_and_position_track_consumption():
    r = reader(b"\x01\x02\x03\x04\x05")
    assert not r.at_end()
    r.read_int8()
    assert r.position == 1
    r.read_uint32()
    assert r.position == 5
    assert r.at_end()


def test_empty_buffer_is_at_end():
    assert reader(b"").at_end()
    with pytest.raises(StreamError):
        reader(b"").read_int8()