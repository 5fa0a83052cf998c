from datetime import datetime, timezone

import pytest

from zaplog import arrays
from zaplog.field import FieldType


class RecordingArrayEncoder:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("append_"):
            return lambda value: self.calls.append((name, value))
        raise AttributeError(name)


def marshal(field):
    enc = RecordingArrayEncoder()
    field.interface.marshal_log_array(enc)
    return enc.calls


EMPTY_CASES = [
    arrays.bools,
    arrays.byte_strings,
    arrays.complex128s,
    arrays.complex64s,
    arrays.durations,
    arrays.float64s,
    arrays.float32s,
    arrays.ints,
    arrays.int64s,
    arrays.int32s,
    arrays.int16s,
    arrays.int8s,
    arrays.strings,
    arrays.times,
    arrays.uints,
    arrays.uint64s,
    arrays.uint32s,
    arrays.uint16s,
    arrays.uint8s,
    arrays.uintptrs,
]


@pytest.mark.parametrize("constructor", EMPTY_CASES)
def test_empty_arrays(constructor):
    field = constructor("k", [])
    assert field.key == "k"
    assert field.type is FieldType.ARRAY_MARSHALER
    assert arrays.array("k", field.interface) == field
    assert marshal(field) == []


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

VALUE_CASES = [
    (arrays.bools, [True, False], "append_bool", [True, False]),
    (arrays.byte_strings, [b"\x01\x02", b"\x03\x04"], "append_byte_string", [b"\x01\x02", b"\x03\x04"]),
    (arrays.complex128s, [1 + 2j, 3 + 4j], "append_complex128", [1 + 2j, 3 + 4j]),
    (arrays.complex64s, [1 + 2j, 3 + 4j], "append_complex64", [1 + 2j, 3 + 4j]),
    (arrays.durations, [1, 2], "append_duration", [1, 2]),
    (arrays.float64s, [1.2, 3.4], "append_float64", [1.2, 3.4]),
    (arrays.float32s, [1.2, 3.4], "append_float32", [1.2000000476837158, 3.4000000953674316]),
    (arrays.ints, [1, 2], "append_int", [1, 2]),
    (arrays.int64s, [1, 2], "append_int64", [1, 2]),
    (arrays.int32s, [1, 2], "append_int32", [1, 2]),
    (arrays.int16s, [1, 2], "append_int16", [1, 2]),
    (arrays.int8s, [1, 2], "append_int8", [1, 2]),
    (arrays.strings, ["foo", "bar"], "append_string", ["foo", "bar"]),
    (arrays.times, [EPOCH, EPOCH], "append_time", [EPOCH, EPOCH]),
    (arrays.uints, [1, 2], "append_uint", [1, 2]),
    (arrays.uint64s, [1, 2], "append_uint64", [1, 2]),
    (arrays.uint32s, [1, 2], "append_uint32", [1, 2]),
    (arrays.uint16s, [1, 2], "append_uint16", [1, 2]),
    (arrays.uint8s, [1, 2], "append_uint8", [1, 2]),
    (arrays.uintptrs, [1, 2], "append_uintptr", [1, 2]),
]


@pytest.mark.parametrize("constructor, values, method, expected", VALUE_CASES)
def test_array_wrappers(constructor, values, method, expected):
    field = constructor("k", values)
    assert arrays.array("k", field.interface) == field
    assert marshal(field) == [(method, value) for value in expected]


def test_array_field_can_be_reused():
    field = arrays.ints("k", [5, 6])
    first = marshal(field)
    second = marshal(field)
    assert first == [("append_int", 5), ("append_int", 6)]
    assert second == first


def test_array_is_snapshot_of_input():
    values = [1, 2]
    field = arrays.ints("k", values)
    values.append(3)
    assert len(field.interface) == 2


def test_array_equality_by_kind_and_values():
    assert arrays.bools("k", [True]) == arrays.bools("k", [True])
    assert arrays.ints("k", [1]) != arrays.int64s("k", [1])


def test_array_wraps_custom_marshaler():
    class Custom:
        def marshal_log_array(self, arr):
            arr.append_string("x")

    custom = Custom()
    field = arrays.array("k", custom)
    assert field.interface is custom
    assert marshal(field) == [("append_string", "x")]