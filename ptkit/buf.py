"""A byte buffer with a read window and typed, endian-aware serialisation."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import Any, Union

from .errors import ErrorCode, PtkError, set_last_error


class FieldType(IntEnum):
    """Wire types understood by :meth:`Buffer.serialize` and :meth:`Buffer.deserialize`."""

    U8 = 0
    S8 = 1
    U16 = 2
    S16 = 3
    U32 = 4
    S32 = 5
    U64 = 6
    S64 = 7
    FLOAT = 8
    DOUBLE = 9
    SERIALIZABLE = 10

    @property
    def size(self) -> int:
        """Encoded size in bytes; 0 for objects that encode themselves."""
        return _SIZES[self]


_SIZES = {
    FieldType.U8: 1,
    FieldType.S8: 1,
    FieldType.U16: 2,
    FieldType.S16: 2,
    FieldType.U32: 4,
    FieldType.S32: 4,
    FieldType.FLOAT: 4,
    FieldType.U64: 8,
    FieldType.S64: 8,
    FieldType.DOUBLE: 8,
    FieldType.SERIALIZABLE: 0,
}

# Formats used when reading: signed types come back signed.
_READ_FORMATS = {
    FieldType.U8: "B",
    FieldType.S8: "b",
    FieldType.U16: "H",
    FieldType.S16: "h",
    FieldType.U32: "I",
    FieldType.S32: "i",
    FieldType.U64: "Q",
    FieldType.S64: "q",
    FieldType.FLOAT: "f",
    FieldType.DOUBLE: "d",
}

# Integers are written as their truncated bit pattern.
_WRITE_INT_FORMATS = {1: "B", 2: "H", 4: "I", 8: "Q"}


class Endian(Enum):
    """Byte order of encoded fields."""

    LITTLE = "<"
    BIG = ">"


class Serializable(ABC):
    """An object that writes itself into and reads itself from a buffer."""

    @abstractmethod
    def serialize(self, buf: "Buffer") -> None:
        """Append this object's encoding to ``buf``."""

    @abstractmethod
    def deserialize(self, buf: "Buffer") -> None:
        """Fill this object from the data at the start of ``buf``."""


Field = Union[Serializable, "tuple[FieldType, Any]"]


def _error(code: ErrorCode, message: str) -> PtkError:
    return PtkError(code, message)


class Buffer:
    """A fixed-capacity byte store with a readable window ``[start, end)``.

    Serialisation appends at ``end``; deserialisation consumes from ``start``.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            set_last_error(ErrorCode.INVALID_PARAM)
            raise _error(ErrorCode.INVALID_PARAM, f"buffer size must be positive, got {size}")
        self._data = bytearray(size)
        self._start = 0
        self._end = 0

    @classmethod
    def from_data(cls, data: bytes) -> "Buffer":
        """Create a buffer holding a copy of ``data`` as its readable content."""
        if data is None:
            set_last_error(ErrorCode.NULL_PTR)
            raise _error(ErrorCode.NULL_PTR, "no data given")
        buf = cls(len(data))
        buf._data[:] = data
        buf._end = len(data)
        return buf

    def __repr__(self) -> str:
        return f"Buffer(capacity={self.capacity}, start={self._start}, end={self._end})"

    def resize(self, new_size: int) -> "Buffer":
        """Change the capacity, clamping ``start`` and ``end`` to it."""
        if new_size <= 0:
            set_last_error(ErrorCode.INVALID_PARAM)
            raise _error(ErrorCode.INVALID_PARAM, f"buffer size must be positive, got {new_size}")
        old_size = len(self._data)
        if new_size > old_size:
            self._data.extend(bytes(new_size - old_size))
        else:
            del self._data[new_size:]
        self._start = min(self._start, new_size)
        self._end = min(self._end, new_size)
        return self

    def __len__(self) -> int:
        return self._end - self._start

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        """Free space after ``end``."""
        return len(self._data) - self._end

    @property
    def start(self) -> int:
        return self._start

    @start.setter
    def start(self, value: int) -> None:
        if value < 0 or value > self._end:
            raise _error(ErrorCode.OUT_OF_BOUNDS, f"start {value} outside 0..{self._end}")
        self._start = value

    @property
    def end(self) -> int:
        return self._end

    @end.setter
    def end(self, value: int) -> None:
        if value < 0 or value > len(self._data):
            raise _error(ErrorCode.OUT_OF_BOUNDS, f"end {value} outside 0..{len(self._data)}")
        self._end = value

    @property
    def data(self) -> bytes:
        """A copy of the readable bytes."""
        return bytes(self._data[self._start:self._end])

    def move_block(self, new_position: int) -> None:
        """Move the readable window so that it begins at ``new_position``."""
        block_size = self._end - self._start
        if new_position < 0 or new_position + block_size > len(self._data):
            raise _error(ErrorCode.OUT_OF_BOUNDS, f"cannot move {block_size} bytes to {new_position}")
        self._data[new_position:new_position + block_size] = self._data[self._start:self._end]
        self._start = new_position
        self._end = new_position + block_size

    # -- serialisation -----------------------------------------------------

    def serialize(self, endian: Endian, *args: Field) -> None:
        """Append each field at ``end``.

        A field is a :class:`Serializable` or a ``(FieldType, value)`` pair.
        On failure the buffer is left as it was.
        """
        prefix = _endian_prefix(endian)
        original_end = self._end
        done = False
        try:
            for arg in args:
                self._write_field(prefix, arg)
            done = True
        finally:
            if not done:
                self._end = original_end

    def deserialize(self, endian: Endian, *args: Union[FieldType, Serializable], peek: bool = False) -> tuple:
        """Read one value per field type from ``start`` and return them.

        A :class:`Serializable` argument is filled in place and returned in
        its slot. With ``peek`` the read position is left unchanged; on
        failure it is always restored.
        """
        prefix = _endian_prefix(endian)
        original_start = self._start
        done = False
        try:
            values = tuple(self._read_field(prefix, arg) for arg in args)
            done = True
        finally:
            if peek or not done:
                self._start = original_start
        return values

    def _write_field(self, prefix: str, arg: Field) -> None:
        if isinstance(arg, Serializable):
            arg.serialize(self)
            return
        if not isinstance(arg, tuple) or len(arg) != 2:
            raise _error(ErrorCode.INVALID_PARAM, f"expected (FieldType, value) or Serializable, got {arg!r}")
        ftype, value = arg
        try:
            ftype = FieldType(ftype)
        except ValueError:
            raise _error(ErrorCode.INVALID_PARAM, f"unknown field type {ftype!r}") from None
        if ftype is FieldType.SERIALIZABLE:
            if not isinstance(value, Serializable):
                raise _error(ErrorCode.INVALID_PARAM, "SERIALIZABLE field needs a Serializable value")
            value.serialize(self)
            return
        size = ftype.size
        if self._end + size > len(self._data):
            raise _error(ErrorCode.BUFFER_TOO_SMALL, f"no room for {size} more bytes")
        try:
            if ftype in (FieldType.FLOAT, FieldType.DOUBLE):
                packed = struct.pack(prefix + _READ_FORMATS[ftype], float(value))
            else:
                mask = (1 << (size * 8)) - 1
                packed = struct.pack(prefix + _WRITE_INT_FORMATS[size], int(value) & mask)
        except (struct.error, OverflowError, TypeError, ValueError) as exc:
            raise _error(ErrorCode.INVALID_PARAM, f"cannot encode {value!r} as {ftype.name}: {exc}") from exc
        self._data[self._end:self._end + size] = packed
        self._end += size

    def _read_field(self, prefix: str, arg: Union[FieldType, Serializable]) -> Any:
        if isinstance(arg, Serializable):
            arg.deserialize(self)
            return arg
        try:
            ftype = FieldType(arg)
        except (ValueError, TypeError):
            raise _error(ErrorCode.INVALID_PARAM, f"unknown field type {arg!r}") from None
        if ftype is FieldType.SERIALIZABLE:
            raise _error(ErrorCode.INVALID_PARAM, "pass the Serializable object itself to read it")
        size = ftype.size
        if self._start + size > self._end:
            raise _error(ErrorCode.BUFFER_TOO_SMALL, f"need {size} bytes, {len(self)} available")
        (value,) = struct.unpack_from(prefix + _READ_FORMATS[ftype], self._data, self._start)
        self._start += size
        return value


def _endian_prefix(endian: Endian) -> str:
    try:
        return Endian(endian).value
    except ValueError:
        raise _error(ErrorCode.INVALID_PARAM, f"unknown byte order {endian!r}") from None