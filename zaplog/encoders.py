"""A registry of named encoder constructors."""

from __future__ import annotations

import threading
from typing import Any, Callable, Mapping, Optional

EncoderConstructor = Callable[[Any], Any]


class NoEncoderNameError(ValueError):
    """Raised when an encoder is registered or requested without a name."""

    def __init__(self) -> None:
        super().__init__("no encoder name specified")


class EncoderRegistry:
    """Thread-safe mapping from encoder names to constructors taking an encoder config."""

    def __init__(self, constructors: Optional[Mapping[str, EncoderConstructor]] = None) -> None:
        self._constructors: dict[str, EncoderConstructor] = dict(constructors or {})
        self._lock = threading.RLock()

    def register(self, name: str, constructor: EncoderConstructor) -> None:
        """Register a constructor; a name may be registered only once."""
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            if name in self._constructors:
                raise ValueError(f'encoder already registered for name "{name}"')
            self._constructors[name] = constructor

    def new_encoder(self, name: str, encoder_config: Any) -> Any:
        """Build an encoder by name from a config with ``time_key`` and ``encode_time``."""
        time_key = getattr(encoder_config, "time_key", "")
        if time_key and getattr(encoder_config, "encode_time", None) is None:
            raise ValueError("missing EncodeTime in EncoderConfig")
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            constructor = self._constructors.get(name)
        if constructor is None:
            raise ValueError(f'no encoder registered for name "{name}"')
        return constructor(encoder_config)

    def names(self) -> list[str]:
        """Registered names in sorted order."""
        with self._lock:
            return sorted(self._constructors)


# Encoder implementations add themselves to this registry.
_default_registry = EncoderRegistry()


def register_encoder(name: str, constructor: EncoderConstructor) -> None:
    """Register a constructor in the package-wide registry."""
    _default_registry.register(name, constructor)


def new_encoder(name: str, encoder_config: Any) -> Any:
    """Build an encoder from the package-wide registry."""
    return _default_registry.new_encoder(name, encoder_config)