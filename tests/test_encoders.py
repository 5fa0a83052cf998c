from types import SimpleNamespace

import pytest

from zaplog.encoders import (
    EncoderRegistry,
    NoEncoderNameError,
    new_encoder,
    register_encoder,
)


def new_nil_encoder(_config):
    return None


def empty_config():
    return SimpleNamespace(time_key="", encode_time=None)


def test_register_encoder():
    registry = EncoderRegistry()
    registry.register("foo", new_nil_encoder)
    assert registry.names() == ["foo"]


def test_initial_constructors():
    registry = EncoderRegistry({"console": new_nil_encoder, "json": new_nil_encoder})
    assert registry.names() == ["console", "json"]


def test_duplicate_register_encoder():
    registry = EncoderRegistry()
    registry.register("foo", new_nil_encoder)
    with pytest.raises(ValueError, match='encoder already registered for name "foo"'):
        registry.register("foo", new_nil_encoder)
    assert registry.names() == ["foo"]


def test_register_encoder_no_name():
    registry = EncoderRegistry()
    with pytest.raises(NoEncoderNameError, match="no encoder name specified"):
        registry.register("", new_nil_encoder)
    assert registry.names() == []


def test_new_encoder():
    registry = EncoderRegistry()
    registry.register("foo", new_nil_encoder)
    assert registry.new_encoder("foo", empty_config()) is None


def test_new_encoder_passes_config():
    registry = EncoderRegistry()
    registry.register("echo", lambda cfg: ("built", cfg))
    cfg = empty_config()
    assert registry.new_encoder("echo", cfg) == ("built", cfg)


def test_new_encoder_not_registered():
    registry = EncoderRegistry()
    with pytest.raises(ValueError, match='no encoder registered for name "foo"'):
        registry.new_encoder("foo", empty_config())


def test_new_encoder_no_name():
    registry = EncoderRegistry()
    with pytest.raises(NoEncoderNameError):
        registry.new_encoder("", empty_config())


def test_new_encoder_missing_encode_time():
    registry = EncoderRegistry({"json": new_nil_encoder})
    cfg = SimpleNamespace(time_key="ts", encode_time=None)
    with pytest.raises(ValueError) as info:
        registry.new_encoder("json", cfg)
    assert str(info.value) == "missing EncodeTime in EncoderConfig"


def test_new_encoder_time_key_with_encode_time():
    registry = EncoderRegistry({"json": lambda cfg: "ok"})
    cfg = SimpleNamespace(time_key="ts", encode_time=str)
    assert registry.new_encoder("json", cfg) == "ok"


def test_module_level_registry():
    register_encoder("test-module-level", lambda cfg: "module")
    assert new_encoder("test-module-level", empty_config()) == "module"
    with pytest.raises(ValueError, match="already registered"):
        register_encoder("test-module-level", new_nil_encoder)


def test_module_level_errors():
    with pytest.raises(NoEncoderNameError):
        register_encoder("", new_nil_encoder)
    with pytest.raises(ValueError, match="no encoder registered"):
        new_encoder("test-never-registered", empty_config())