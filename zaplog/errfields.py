"""Field constructors for exceptions and sequences of exceptions."""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .arrays import array
from .field import Field, FieldType, skip


def named_error(key: str, err: Optional[BaseException]) -> Field:
    """A field storing an exception under ``key``; ``None`` gives a no-op field."""
    if err is None:
        return skip()
    return Field(key=key, type=FieldType.ERROR, interface=err)


def error(err: Optional[BaseException]) -> Field:
    """Shorthand for ``named_error("error", err)``."""
    return named_error("error", err)


def _add_error(enc: Any, key: str, err: BaseException) -> None:
    """Write an exception's message, and its traceback when it has one."""
    enc.add_string(key, str(err))
    if err.__traceback__ is not None:
        verbose = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        enc.add_string(key + "Verbose", verbose)


@dataclass(frozen=True)
class _ErrorElement:
    err: BaseException

    def marshal_log_object(self, enc: Any) -> None:
        _add_error(enc, "error", self.err)


@dataclass(frozen=True)
class _ErrorArray:
    errs: tuple

    def marshal_log_array(self, arr: Any) -> None:
        for err in self.errs:
            if err is not None:
                arr.append_object(_ErrorElement(err))


def errors(key: str, errs: Iterable[Optional[BaseException]]) -> Field:
    """A field holding exceptions, each written as an object; ``None`` entries are skipped."""
    return array(key, _ErrorArray(tuple(errs)))