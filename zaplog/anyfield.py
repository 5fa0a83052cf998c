"""Choosing the best field constructor for an arbitrary value."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from . import arrays
from .errfields import errors, named_error
from .field import (
    Field,
    binary,
    boolean,
    complex128,
    duration,
    float64,
    integer,
    nil_field,
    object_field,
    reflect,
    string,
    stringer,
    time,
)


def _is_error_list(values: list) -> bool:
    return any(isinstance(v, BaseException) for v in values) and all(
        v is None or isinstance(v, BaseException) for v in values
    )


def _sequence_constructor(values: list) -> Optional[Callable[[str, Any], Field]]:
    if not values:
        return None
    if all(isinstance(v, bool) for v in values):
        return arrays.bools
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return arrays.ints
    if all(isinstance(v, float) for v in values):
        return arrays.float64s
    if all(isinstance(v, complex) for v in values):
        return arrays.complex128s
    if all(isinstance(v, str) for v in values):
        return arrays.strings
    if all(isinstance(v, datetime) for v in values):
        return arrays.times
    if all(isinstance(v, timedelta) for v in values):
        return arrays.durations
    if _is_error_list(values):
        return errors
    return None


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def any_field(key: str, value: Any) -> Field:
    """Build the most specific field for ``value``, falling back to a reflected field."""
    if hasattr(value, "marshal_log_object"):
        return object_field(key, value)
    if hasattr(value, "marshal_log_array"):
        return arrays.array(key, value)
    if value is None:
        return nil_field(key)
    if isinstance(value, bool):
        return boolean(key, value)
    if isinstance(value, complex):
        return complex128(key, value)
    if isinstance(value, float):
        return float64(key, value)
    if isinstance(value, int):
        try:
            return integer(key, value)
        except OverflowError:
            return reflect(key, value)
    if isinstance(value, str):
        return string(key, value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return binary(key, value)
    if isinstance(value, datetime):
        return time(key, value)
    if isinstance(value, timedelta):
        return duration(key, value)
    if isinstance(value, BaseException):
        return named_error(key, value)
    if isinstance(value, (list, tuple)):
        constructor = _sequence_constructor(list(value))
        if constructor is None:
            return reflect(key, value)
        return constructor(key, value)
    if _has_own_str(value):
        return stringer(key, value)
    return reflect(key, value)