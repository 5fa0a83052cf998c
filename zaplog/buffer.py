"""A growable byte buffer with text formatters, and a thread-safe pool of buffers."""

from __future__ import annotations

import math
import struct
import threading
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

DEFAULT_SIZE = 1024

TimeLayout = Union[str, Callable[[datetime], str]]


def _format_rfc3339(t: datetime) -> str:
    if t.tzinfo is None or t.utcoffset() is None:
        t = t.astimezone()
    base = (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
    )
    offset = t.utcoffset()
    if not offset:
        return base + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    return f"{base}{sign}{hours:02d}:{rest // 60:02d}"


RFC3339: Callable[[datetime], str] = _format_rfc3339
"""Layout producing ``2006-01-02T15:04:05Z07:00`` style timestamps."""


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_float(value: float, bit_size: int) -> str:
    if bit_size not in (32, 64):
        raise ValueError(f"illegal float bit size: {bit_size}")
    if bit_size == 32:
        value = _to_float32(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if bit_size == 64:
        digits = repr(value)
    else:
        digits = f"{value:.9g}"
        for precision in range(1, 10):
            candidate = f"{value:.{precision}g}"
            if _to_float32(float(candidate)) == value:
                digits = candidate
                break
    return format(Decimal(digits).normalize(), "f")


class Buffer:
    """Append-only byte buffer; obtain one from a :class:`Pool`."""

    __slots__ = ("_bs", "_size", "_pool")

    def __init__(self, size: int = DEFAULT_SIZE, pool: Optional["Pool"] = None) -> None:
        self._bs = bytearray()
        self._size = size
        self._pool = pool

    def append_byte(self, v: int) -> None:
        """Append a single byte given as an integer in 0..255."""
        self._bs.append(v)

    def append_string(self, s: str) -> None:
        """Append the UTF-8 encoding of a string."""
        self._bs += s.encode("utf-8")

    def append_int(self, i: int) -> None:
        """Append a signed integer in base 10."""
        self._bs += str(int(i)).encode("ascii")

    def append_uint(self, i: int) -> None:
        """Append an unsigned integer in base 10."""
        if i < 0:
            raise ValueError(f"unsigned integer expected, got {i}")
        self._bs += str(int(i)).encode("ascii")

    def append_bool(self, v: bool) -> None:
        """Append ``true`` or ``false``."""
        self._bs += b"true" if v else b"false"

    def append_float(self, f: float, bit_size: int) -> None:
        """Append the shortest round-tripping decimal form of a 32 or 64 bit float.

        NaN and infinities are written unquoted as ``NaN``, ``+Inf`` and ``-Inf``.
        """
        self._bs += _format_float(f, bit_size).encode("ascii")

    def append_time(self, t: datetime, layout: TimeLayout) -> None:
        """Append a time formatted with a strftime pattern or a formatting callable."""
        text = layout(t) if callable(layout) else t.strftime(layout)
        self._bs += text.encode("utf-8")

    def capacity(self) -> int:
        """Number of bytes reserved for the buffer; grows to fit its contents."""
        return max(self._size, len(self._bs))

    def getvalue(self) -> bytes:
        """Return a copy of the buffer's contents."""
        return bytes(self._bs)

    def reset(self) -> None:
        """Discard the contents, keeping the buffer for reuse."""
        self._bs.clear()

    def write(self, bs: bytes) -> int:
        """Append raw bytes and return how many were written."""
        self._bs += bs
        return len(bs)

    def write_byte(self, v: int) -> None:
        """Append a single byte."""
        self.append_byte(v)

    def write_string(self, s: str) -> int:
        """Append a string and return the number of bytes written."""
        data = s.encode("utf-8")
        self._bs += data
        return len(data)

    def trim_newline(self) -> None:
        """Remove one trailing newline, if present."""
        if self._bs.endswith(b"\n"):
            del self._bs[-1]

    def free(self) -> None:
        """Return the buffer to the pool it came from."""
        if self._pool is None:
            raise RuntimeError("buffer does not belong to a pool")
        self._pool.put(self)

    def __len__(self) -> int:
        return len(self._bs)

    def __bytes__(self) -> bytes:
        return bytes(self._bs)

    def __str__(self) -> str:
        return self._bs.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"Buffer({bytes(self._bs)!r})"


class Pool:
    """Thread-safe pool of reusable buffers."""

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        self._size = size
        self._free: list[Buffer] = []
        self._lock = threading.Lock()

    def get(self) -> Buffer:
        """Take an empty buffer from the pool, creating one if none is free."""
        with self._lock:
            buf = self._free.pop() if self._free else None
        if buf is None:
            buf = Buffer(self._size)
        buf.reset()
        buf._pool = self
        return buf

    def put(self, buf: Buffer) -> None:
        """Give a buffer back to the pool."""
        with self._lock:
            self._free.append(buf)