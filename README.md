# zaplog

Building blocks for structured logging. The package has typed log fields,
array and error fields, a pooled byte buffer and a registry of named encoder
constructors. It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Fields

A `Field` is a frozen dataclass. It holds a `key`, a `FieldType` and its
value in one of three slots: `integer`, `string` or `interface`. The
constructors in `zaplog.field` build fields:

```python
from zaplog import field

field.string("user", "alice")
field.int64("attempt", 3)
field.boolean("ok", True)
field.float64("ratio", 0.5)          # stored as its IEEE 754 bit pattern
field.duration("backoff", 1_000_000_000)  # nanoseconds, or a timedelta
field.namespace("request")           # later fields nest under "request"
field.skip()                         # a no-op field
field.nil_field("missing")           # encodes explicitly as nil
field.stack("stacktrace")            # the caller's stack as a string
```

For the sized integer constructors (`int8` … `int64`, `uint8` … `uint64`,
`uintptr`), a value outside the type's range raises `OverflowError`. Most
constructors turn a `None` value into a nil field.

`field.time(key, dt)` keeps a datetime as Unix nanoseconds plus its tzinfo.
If the datetime falls outside the 64-bit nanosecond range, it keeps the
datetime itself under `FieldType.TIME_FULL`.

`object_field` wraps any object that has a `marshal_log_object(encoder)`
method. `inline` does the same, but its members are added to the current
namespace. `reflect` wraps an arbitrary value.

### Choosing a field automatically

`zaplog.anyfield.any_field(key, value)` picks the most specific field:

- objects with `marshal_log_object` or `marshal_log_array` become object or
  array fields;
- `None` becomes a nil field;
- bools, ints, floats, complex numbers, strings, bytes, datetimes,
  timedeltas and exceptions each get their typed field;
- lists and tuples whose elements all share one of these types become
  typed arrays;
- other objects that define their own `__str__` become `stringer` fields.

Anything else falls back to `reflect`, and so do ints that do not fit in
64 bits.

## Arrays and errors

```python
from zaplog import arrays, errfields

arrays.ints("ids", [1, 2, 3])
arrays.strings("tags", ["a", "b"])
arrays.array("custom", obj)              # obj has marshal_log_array(encoder)

errfields.error(ValueError("boom"))      # stored under "error"
errfields.named_error("cause", None)     # a no-op field
errfields.errors("failures", [ValueError("a"), None, KeyError("b")])
```

A typed array field calls the matching `append_*` method of the array
encoder for each element, for example `append_int` or `append_string`.
Errors in an `errors` field are each written as an object with an `"error"`
key. An exception that carries a traceback also gets an `"errorVerbose"`
key. `None` entries are skipped.

## Buffers

```python
from zaplog.buffer import Pool, RFC3339

pool = Pool()
buf = pool.get()
buf.append_string("count=")
buf.append_int(42)
buf.getvalue()                 # b"count=42"
buf.append_float(3.14, 64)     # shortest round-tripping form
buf.append_time(dt, RFC3339)   # or a strftime pattern
buf.free()                     # hand it back to the pool
```

`append_float` writes NaN and infinities as `NaN`, `+Inf` and `-Inf`.
`trim_newline` drops one trailing newline. Calling `free` on a buffer that
did not come from a pool raises `RuntimeError`. A `Pool` is safe to use
from several threads.

## Encoder registry

`zaplog.encoders.EncoderRegistry` maps names to constructors. A constructor
takes an encoder config and returns an encoder. The package-wide registry
starts empty, and is used through `register_encoder` and `new_encoder`:

```python
from zaplog.encoders import register_encoder, new_encoder

register_encoder("plain", make_plain_encoder)
encoder = new_encoder("plain", config)
```

These calls raise errors:

- An empty name raises `NoEncoderNameError`.
- Registering a name that is already taken raises `ValueError`.
- Asking for a name that is not registered raises `ValueError`.
- A config with a non-empty `time_key` and no `encode_time` raises
  `ValueError("missing EncodeTime in EncoderConfig")`.

`EncoderRegistry.names()` lists the registered names in sorted order.

## What this package does not do

It provides no logger, no log levels, no sampling and no configuration
presets. It has no JSON or console encoder and no output sinks. Fields,
buffers and the registry are the parts a logger would be built from, but
turning fields into log lines is left to encoders you register yourself.