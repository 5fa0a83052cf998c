"""Field constructors for sequences of values that marshal lazily as arrays."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable

from .field import Field, FieldType, _to_float32


@dataclass(frozen=True)
class _TypedArray:
    """An immutable sequence that writes each element with one encoder method."""

    method: str
    values: tuple

    def marshal_log_array(self, arr: Any) -> None:
        append = getattr(arr, self.method)
        for value in self.values:
            append(value)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


def array(key: str, val: Any) -> Field:
    """A field holding an object with a ``marshal_log_array(encoder)`` method."""
    return Field(key=key, type=FieldType.ARRAY_MARSHALER, interface=val)


def _typed(key: str, method: str, values: Iterable[Any]) -> Field:
    return array(key, _TypedArray(method, tuple(values)))


def bools(key: str, bs: Iterable[bool]) -> Field:
    """A field holding a sequence of bools."""
    return _typed(key, "append_bool", (bool(b) for b in bs))


def byte_strings(key: str, bss: Iterable[bytes]) -> Field:
    """A field holding a sequence of UTF-8 byte strings."""
    return _typed(key, "append_byte_string", (bytes(b) for b in bss))


def complex128s(key: str, nums: Iterable[complex]) -> Field:
    """A field holding a sequence of double-precision complex numbers."""
    return _typed(key, "append_complex128", (complex(n) for n in nums))


def _complex64(value: complex) -> complex:
    value = complex(value)
    return complex(_to_float32(value.real), _to_float32(value.imag))


def complex64s(key: str, nums: Iterable[complex]) -> Field:
    """A field holding a sequence of complex numbers at single precision."""
    return _typed(key, "append_complex64", (_complex64(n) for n in nums))


def durations(key: str, ds: Iterable[timedelta | int]) -> Field:
    """A field holding a sequence of durations (timedeltas or nanoseconds)."""
    return _typed(key, "append_duration", ds)


def float64s(key: str, nums: Iterable[float]) -> Field:
    """A field holding a sequence of doubles."""
    return _typed(key, "append_float64", (float(n) for n in nums))


def float32s(key: str, nums: Iterable[float]) -> Field:
    """A field holding a sequence of floats rounded to single precision."""
    return _typed(key, "append_float32", (_to_float32(float(n)) for n in nums))


def ints(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of platform-sized integers."""
    return _typed(key, "append_int", nums)


def int64s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 64-bit integers."""
    return _typed(key, "append_int64", nums)


def int32s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 32-bit integers."""
    return _typed(key, "append_int32", nums)


def int16s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 16-bit integers."""
    return _typed(key, "append_int16", nums)


def int8s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 8-bit integers."""
    return _typed(key, "append_int8", nums)


def strings(key: str, ss: Iterable[str]) -> Field:
    """A field holding a sequence of strings."""
    return _typed(key, "append_string", ss)


def times(key: str, ts: Iterable[datetime]) -> Field:
    """A field holding a sequence of datetimes."""
    return _typed(key, "append_time", ts)


def uints(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of platform-sized unsigned integers."""
    return _typed(key, "append_uint", nums)


def uint64s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 64-bit unsigned integers."""
    return _typed(key, "append_uint64", nums)


def uint32s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 32-bit unsigned integers."""
    return _typed(key, "append_uint32", nums)


def uint16s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 16-bit unsigned integers."""
    return _typed(key, "append_uint16", nums)


def uint8s(key: str, nums: Iterable[int]) -> Field:
    """A field holding a sequence of 8-bit unsigned integers."""
    return _typed(key, "append_uint8", nums)


def uintptrs(key: str, us: Iterable[int]) -> Field:
    """A field holding a sequence of pointer-sized addresses."""
    return _typed(key, "append_uintptr", us)