# ptkit

Building blocks for binary protocol code. The package provides a
fixed-capacity byte buffer with typed, endian-aware serialization, a shared
set of error codes with a per-thread "last error", wall-clock time and
signal-based interrupt handling, and small threading primitives that take
timeouts in milliseconds.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Buffers and serialization (`ptkit.buf`)

`Buffer(size)` holds `size` bytes. Its readable window runs from `start`
to `end`. Serialization appends at `end` and deserialization consumes from
`start`. `len(buf)` is the number of readable bytes. `capacity` is the
total size and `remaining` is the free space after `end`.
`Buffer.from_data(data)` makes a buffer whose readable content is a copy
of `data`.

```python
from ptkit.buf import Buffer, Endian, FieldType

buf = Buffer(256)
buf.serialize(
    Endian.LITTLE,
    (FieldType.U16, 0x0065),
    (FieldType.U16, 4),
    (FieldType.U32, 0x12345678),
    (FieldType.U64, 0x123456789ABCDEF0),
)
assert len(buf) == 16

command, length, session, context = buf.deserialize(
    Endian.LITTLE, FieldType.U16, FieldType.U16, FieldType.U32, FieldType.U64
)
assert len(buf) == 0
```

- The field types are `U8`, `S8`, `U16`, `S16`, `U32`, `S32`, `U64`,
  `S64`, `FLOAT` and `DOUBLE`. `FieldType.size` gives the encoded width.
- On write, an integer is stored as its bit pattern truncated to the
  field's width. On read, a signed type returns a signed value.
- The byte order is `Endian.LITTLE` or `Endian.BIG`.
- With `deserialize(..., peek=True)` the values are read and `start` does
  not move.
- When a write does not fit, or a read needs more bytes than are
  readable, `ptkit.errors.PtkError` is raised with
  `ErrorCode.BUFFER_TOO_SMALL`. In that case no field of the call is
  written, or `start` is restored. An unknown field type or an
  unencodable value raises `ErrorCode.INVALID_PARAM`.

### Composite messages

Subclass `Serializable` and implement `serialize(buf)` and
`deserialize(buf)`. An instance can be passed to `Buffer.serialize`
directly, or as `(FieldType.SERIALIZABLE, obj)`, alongside primitive
fields. To read one back, pass the instance itself to
`Buffer.deserialize`. It is filled in place and returned in its slot.

```python
from ptkit.buf import Buffer, Endian, FieldType, Serializable

class Pdu(Serializable):
    def __init__(self, command=0, length=0, checksum=0):
        self.command, self.length, self.checksum = command, length, checksum

    def serialize(self, buf):
        buf.serialize(Endian.LITTLE,
                      (FieldType.U16, self.command),
                      (FieldType.U32, self.length),
                      (FieldType.U16, self.checksum))

    def deserialize(self, buf):
        self.command, self.length, self.checksum = buf.deserialize(
            Endian.LITTLE, FieldType.U16, FieldType.U32, FieldType.U16)

buf = Buffer(64)
buf.serialize(Endian.LITTLE, (FieldType.U8, 0xAA), Pdu(0x1234, 0x56789ABC, 0xDEAD))
preamble, pdu = buf.deserialize(Endian.LITTLE, FieldType.U8, Pdu())
```

### Positioning

You can assign to `start` and `end`. `start` must lie within
`0..end`, and `end` must lie within `0..capacity`. A value outside these
ranges raises `PtkError` with `ErrorCode.OUT_OF_BOUNDS`. `data` returns
a copy of the readable bytes. `move_block(position)` moves the readable
window so that it begins at `position`. `resize(new_size)` changes the
capacity, zero-fills any new space and clamps `start` and `end` to the
new size.

## Errors (`ptkit.errors`)

`ErrorCode` lists every status the toolkit uses. `error_string(code)`
returns a description, or `"Unknown error"` for values outside the
list. `PtkError(code, message=None)` carries `code` and `message`; the
message defaults to the code's description. `set_last_error(code)` and
`last_error()` keep a per-thread last error, which starts as
`ErrorCode.OK`.

## Time and interrupts (`ptkit.utils`)

`now_ms()` returns milliseconds since the Unix epoch.
`set_interrupt_handler(handler)` makes SIGINT, SIGTERM and, where the
platform has it, SIGHUP call `handler()` with no arguments. Passing
`None` restores the default actions. If the handler cannot be installed,
for example when called from a thread other than the main thread, it
raises `PtkError` with `ErrorCode.CONFIGURATION_ERROR`.

## Threading (`ptkit.thread`)

- `Mutex` is recursive. `lock(timeout_ms)` blocks when given
  `TIME_WAIT_FOREVER` (`None`). With `TIME_NO_WAIT` (`0`) it tries once
  and raises `ErrorCode.WOULD_BLOCK` if the mutex is held. With a
  positive timeout it raises `ErrorCode.TIMEOUT` when the time runs out.
  `unlock()` releases the mutex. A `Mutex` also works as a context
  manager.
- `ConditionVariable.wait(mutex, timeout_ms)` releases the mutex, waits
  for `signal()`, then takes the mutex again. If no signal arrives in
  time it raises `ErrorCode.TIMEOUT`; the mutex is held again in either
  case. `signal()` wakes one waiter.
- `Thread(func, data)` starts a thread at once that runs `func(data)`.
  `join()` waits for it to finish, and `alive` tells whether it is still
  running.

## What this package does not do

It has no logger or hex-dump output, no command-line option parser, and
no atomic-integer or memory-block helpers. It has no sockets or network
transport, and no protocol implementation or server. It does not install
any command. Everything here is a library to import from your own
protocol code.