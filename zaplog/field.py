"""Typed key/value fields and the constructors that build them."""

from __future__ import annotations

import enum
import functools
import math
import operator
import struct
import traceback
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class FieldType(enum.IntEnum):
    """How a field's value is stored and how an encoder should write it."""

    UNKNOWN = 0
    ARRAY_MARSHALER = enum.auto()
    OBJECT_MARSHALER = enum.auto()
    BINARY = enum.auto()
    BOOL = enum.auto()
    BYTE_STRING = enum.auto()
    COMPLEX128 = enum.auto()
    COMPLEX64 = enum.auto()
    DURATION = enum.auto()
    FLOAT64 = enum.auto()
    FLOAT32 = enum.auto()
    INT64 = enum.auto()
    INT32 = enum.auto()
    INT16 = enum.auto()
    INT8 = enum.auto()
    STRING = enum.auto()
    TIME = enum.auto()
    TIME_FULL = enum.auto()
    UINT64 = enum.auto()
    UINT32 = enum.auto()
    UINT16 = enum.auto()
    UINT8 = enum.auto()
    UINTPTR = enum.auto()
    REFLECT = enum.auto()
    NAMESPACE = enum.auto()
    STRINGER = enum.auto()
    ERROR = enum.auto()
    SKIP = enum.auto()
    INLINE_MARSHALER = enum.auto()


@dataclass(frozen=True)
class Field:
    """An immutable key/value pair; the value lives in one of the payload slots."""

    key: str = ""
    type: FieldType = FieldType.UNKNOWN
    integer: int = 0
    string: str = ""
    interface: Any = None


def _nullable(func: Callable[[str, Any], Field]) -> Callable[[str, Any], Field]:
    """Make a constructor turn a ``None`` value into an explicit nil field."""

    @functools.wraps(func)
    def wrapper(key: str, val: Any) -> Field:
        if val is None:
            return nil_field(key)
        return func(key, val)

    return wrapper


def _ranged(val: Any, bits: int, signed: bool) -> int:
    val = operator.index(val)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= val <= high:
        kind = "int" if signed else "uint"
        raise OverflowError(f"{val} is out of range for {kind}{bits}")
    return val


def _as_int64_bits(val: int) -> int:
    return val - (1 << 64) if val > _INT64_MAX else val


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def skip() -> Field:
    """A no-op field."""
    return Field(type=FieldType.SKIP)


def reflect(key: str, val: Any) -> Field:
    """A field holding an arbitrary object, serialised generically by the encoder."""
    return Field(key=key, type=FieldType.REFLECT, interface=val)


def nil_field(key: str) -> Field:
    """A field that encodes explicitly as nil."""
    return reflect(key, None)


def binary(key: str, val: bytes) -> Field:
    """A field holding an opaque binary blob."""
    return Field(key=key, type=FieldType.BINARY, interface=bytes(val))


@_nullable
def boolean(key: str, val: bool) -> Field:
    """A field holding a bool."""
    return Field(key=key, type=FieldType.BOOL, integer=1 if val else 0)


def byte_string(key: str, val: bytes) -> Field:
    """A field holding UTF-8 text as bytes."""
    return Field(key=key, type=FieldType.BYTE_STRING, interface=bytes(val))


@_nullable
def complex128(key: str, val: complex) -> Field:
    """A field holding a double-precision complex number."""
    return Field(key=key, type=FieldType.COMPLEX128, interface=complex(val))


@_nullable
def complex64(key: str, val: complex) -> Field:
    """A field holding a complex number rounded to single precision."""
    val = complex(val)
    rounded = complex(_to_float32(val.real), _to_float32(val.imag))
    return Field(key=key, type=FieldType.COMPLEX64, interface=rounded)


@_nullable
def float64(key: str, val: float) -> Field:
    """A field holding a double, stored as its IEEE 754 bit pattern."""
    bits = struct.unpack("<q", struct.pack("<d", float(val)))[0]
    return Field(key=key, type=FieldType.FLOAT64, integer=bits)


@_nullable
def float32(key: str, val: float) -> Field:
    """A field holding a single-precision float, stored as its bit pattern."""
    single = _to_float32(float(val))
    bits = struct.unpack("<I", struct.pack("<f", single))[0]
    return Field(key=key, type=FieldType.FLOAT32, integer=bits)


@_nullable
def int64(key: str, val: int) -> Field:
    """A field holding a 64-bit signed integer."""
    return Field(key=key, type=FieldType.INT64, integer=_ranged(val, 64, True))


@_nullable
def integer(key: str, val: int) -> Field:
    """A field holding a platform-sized signed integer."""
    return int64(key, val)


@_nullable
def int32(key: str, val: int) -> Field:
    """A field holding a 32-bit signed integer."""
    return Field(key=key, type=FieldType.INT32, integer=_ranged(val, 32, True))


@_nullable
def int16(key: str, val: int) -> Field:
    """A field holding a 16-bit signed integer."""
    return Field(key=key, type=FieldType.INT16, integer=_ranged(val, 16, True))


@_nullable
def int8(key: str, val: int) -> Field:
    """A field holding an 8-bit signed integer."""
    return Field(key=key, type=FieldType.INT8, integer=_ranged(val, 8, True))


@_nullable
def string(key: str, val: str) -> Field:
    """A field holding a string."""
    return Field(key=key, type=FieldType.STRING, string=val)


@_nullable
def uint64(key: str, val: int) -> Field:
    """A field holding a 64-bit unsigned integer, stored as its signed bit pattern."""
    val = _ranged(val, 64, False)
    return Field(key=key, type=FieldType.UINT64, integer=_as_int64_bits(val))


@_nullable
def uint(key: str, val: int) -> Field:
    """A field holding a platform-sized unsigned integer."""
    return uint64(key, val)


@_nullable
def uint32(key: str, val: int) -> Field:
    """A field holding a 32-bit unsigned integer."""
    return Field(key=key, type=FieldType.UINT32, integer=_ranged(val, 32, False))


@_nullable
def uint16(key: str, val: int) -> Field:
    """A field holding a 16-bit unsigned integer."""
    return Field(key=key, type=FieldType.UINT16, integer=_ranged(val, 16, False))


@_nullable
def uint8(key: str, val: int) -> Field:
    """A field holding an 8-bit unsigned integer."""
    return Field(key=key, type=FieldType.UINT8, integer=_ranged(val, 8, False))


@_nullable
def uintptr(key: str, val: int) -> Field:
    """A field holding a pointer-sized address."""
    val = _ranged(val, 64, False)
    return Field(key=key, type=FieldType.UINTPTR, integer=_as_int64_bits(val))


def namespace(key: str) -> Field:
    """A field opening a named scope for all following fields."""
    return Field(key=key, type=FieldType.NAMESPACE)


def stringer(key: str, val: Any) -> Field:
    """A field whose value is ``str(val)``, computed lazily by the encoder."""
    return Field(key=key, type=FieldType.STRINGER, interface=val)


def _unix_nanos(val: datetime) -> int | None:
    try:
        aware = val if val.utcoffset() is not None else val.astimezone()
        delta = aware - _EPOCH
    except (OverflowError, ValueError, OSError):
        return None
    return (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000


@_nullable
def time(key: str, val: datetime) -> Field:
    """A field holding a point in time.

    Times within the range of 64-bit Unix nanoseconds are stored as nanoseconds
    plus the time zone (``None`` for naive, local times); others keep the
    datetime itself.
    """
    if not isinstance(val, datetime):
        raise TypeError(f"datetime expected, got {type(val).__name__}")
    nanos = _unix_nanos(val)
    if nanos is None or not _INT64_MIN <= nanos <= _INT64_MAX:
        return Field(key=key, type=FieldType.TIME_FULL, interface=val)
    return Field(key=key, type=FieldType.TIME, integer=nanos, interface=val.tzinfo)


def _take_stacktrace(skip: int) -> str:
    frames = traceback.extract_stack()[:-1]
    frames = frames[: max(len(frames) - skip, 0)]
    return "\n".join(
        f"{frame.name}\n\t{frame.filename}:{frame.lineno}" for frame in reversed(frames)
    )


def stack_skip(key: str, skip: int) -> Field:
    """A string field holding the current stack, innermost frame first, minus ``skip`` frames."""
    return string(key, _take_stacktrace(skip + 1))


def stack(key: str) -> Field:
    """A string field holding the caller's stack, innermost frame first."""
    return stack_skip(key, 1)


@_nullable
def duration(key: str, val: timedelta | int) -> Field:
    """A field holding a duration, given as a timedelta or in nanoseconds."""
    if isinstance(val, timedelta):
        nanos = (val.days * 86400 + val.seconds) * 10**9 + val.microseconds * 1000
    else:
        nanos = val
    return Field(key=key, type=FieldType.DURATION, integer=_ranged(nanos, 64, True))


def object_field(key: str, val: Any) -> Field:
    """A field holding an object that marshals itself into a nested object."""
    return Field(key=key, type=FieldType.OBJECT_MARSHALER, interface=val)


def inline(val: Any) -> Field:
    """A field whose object members are added to the current namespace."""
    return Field(type=FieldType.INLINE_MARSHALER, interface=val)