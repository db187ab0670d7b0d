"""Reader for the big-endian binary serialization used by the parser stream."""

from __future__ import annotations

import math
import struct
from typing import Callable, TypeVar

T = TypeVar("T")

# Stream versions from this one on serialize single precision floats as doubles.
_DOUBLE_PRECISION_FLOATS_VERSION = 12

# Length marker for a null byte array or string.
_NULL_LENGTH = 0xFFFFFFFF

_INT8 = struct.Struct(">b")
_UINT8 = struct.Struct(">B")
_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_INT64 = struct.Struct(">q")
_UINT64 = struct.Struct(">Q")
_FLOAT = struct.Struct(">f")
_DOUBLE = struct.Struct(">d")


class StreamError(ValueError):
    """Raised when the data ends early or holds corrupt values."""


class DataStreamReader:
    """Sequential reader of big-endian serialized values from a byte buffer."""

    def __init__(self, data: bytes | bytearray | memoryview, version: int) -> None:
        self._data = bytes(data)
        self._pos = 0
        self.version = version

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise StreamError(
                f"read past end: need {size} bytes at offset {self._pos}, "
                f"only {len(self._data) - self._pos} available"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self._take(fmt.size))[0]

    def read_int8(self) -> int:
        return self._unpack(_INT8)

    def read_uint8(self) -> int:
        return self._unpack(_UINT8)

    def read_int32(self) -> int:
        return self._unpack(_INT32)

    def read_uint32(self) -> int:
        return self._unpack(_UINT32)

    def read_int64(self) -> int:
        return self._unpack(_INT64)

    def read_uint64(self) -> int:
        return self._unpack(_UINT64)

    def read_bool(self) -> bool:
        return self.read_int8() != 0

    def read_float(self) -> float:
        """Read a single precision float, honouring the stream version."""
        if self.version < _DOUBLE_PRECISION_FLOATS_VERSION:
            return self._unpack(_FLOAT)
        value = self._unpack(_DOUBLE)
        try:
            return _FLOAT.unpack(_FLOAT.pack(value))[0]
        except OverflowError:
            return math.copysign(math.inf, value)

    def read_bytes(self) -> bytes:
        """Read a length-prefixed byte array; a null array reads as empty."""
        length = self.read_uint32()
        if length == _NULL_LENGTH:
            return b""
        return self._take(length)

    def read_string(self) -> str:
        """Read a length-prefixed UTF-16 big-endian string."""
        length = self.read_uint32()
        if length == _NULL_LENGTH:
            return ""
        if length % 2:
            raise StreamError(f"corrupt string: odd byte length {length}")
        raw = self._take(length)
        return raw.decode("utf-16-be", errors="replace")

    def read_list(self, read_item: Callable[[DataStreamReader], T]) -> list[T]:
        """Read a count-prefixed sequence, each item read by ``read_item``."""
        count = self.read_uint32()
        return [read_item(self) for _ in range(count)]

    def at_end(self) -> bool:
        return self._pos >= len(self._data)