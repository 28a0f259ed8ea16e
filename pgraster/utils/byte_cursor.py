"""Bounds-checked, endian-aware reader over an immutable byte buffer.

ByteCursor reads fixed-width primitives from a raster WKB buffer. The byte
order is fixed once per stream (from the WKB endianness byte) and applies to
every multi-byte read after that. The cursor only moves forward, and a read
that would run past the end of the buffer raises BufferUnderrun without
consuming anything.

Example:
    Read the first fields of a raster header:
        >>> from pgraster.utils.byte_cursor import ByteCursor

        >>> cursor = ByteCursor(wkb)
        >>> cursor.set_byte_order(cursor.read_uint8() != 0)
        >>> version = cursor.read_uint16()
        >>> cursor.offset
        3
"""

from __future__ import annotations

import struct

from pgraster.core import errors

_FORMATS = {
    "uint16": "H",
    "uint32": "I",
    "int32": "i",
    "float64": "d",
}


class ByteCursor:
    """Forward-only reader over a bytes-like buffer.

    Args:
        data: Buffer to read (bytes, bytearray or memoryview). It is never
            modified; non-contiguous views are copied first.
        little_endian: Byte order for multi-byte reads. Leave as None to fix
            it later with set_byte_order().
    """

    __slots__ = ("_buf", "_pos", "_order")

    def __init__(
        self,
        data: bytes | bytearray | memoryview,
        little_endian: bool | None = None,
    ) -> None:
        view = memoryview(data)
        if not view.c_contiguous:
            view = memoryview(view.tobytes())
        self._buf = view.cast("B")
        self._pos = 0
        self._order: str | None = None
        if little_endian is not None:
            self.set_byte_order(little_endian)

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._pos

    @property
    def remaining(self) -> int:
        """Number of bytes left to read."""
        return len(self._buf) - self._pos

    @property
    def little_endian(self) -> bool | None:
        """Byte order of the stream, or None while it is not fixed yet."""
        if self._order is None:
            return None
        return self._order == "<"

    def set_byte_order(self, little_endian: bool) -> None:
        """Fix the byte order used by all multi-byte reads.

        Raises:
            ValueError: if the byte order was already fixed.
        """
        if self._order is not None:
            raise ValueError("byte order is already fixed for this stream")
        self._order = "<" if little_endian else ">"

    def _take(self, size: int) -> memoryview:
        if size < 0:
            raise ValueError(f"cannot read a negative number of bytes: {size}")
        if size > self.remaining:
            raise errors.BufferUnderrun(self._pos, size, self.remaining)
        chunk = self._buf[self._pos : self._pos + size]
        self._pos += size
        return chunk

    def _unpack(self, kind: str) -> int | float:
        if self._order is None:
            raise ValueError(f"byte order must be fixed before reading {kind}")
        fmt = self._order + _FORMATS[kind]
        return struct.unpack(fmt, self._take(struct.calcsize(fmt)))[0]

    def read_uint8(self) -> int:
        """Read one unsigned byte."""
        return self._take(1)[0]

    def read_uint16(self) -> int:
        """Read an unsigned 16-bit integer in stream byte order."""
        return int(self._unpack("uint16"))

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer in stream byte order."""
        return int(self._unpack("uint32"))

    def read_int32(self) -> int:
        """Read a signed 32-bit integer in stream byte order."""
        return int(self._unpack("int32"))

    def read_float64(self) -> float:
        """Read an IEEE-754 double in stream byte order.

        The value is rebuilt from the 8 wire bytes in the stream's order,
        independent of the host platform's native order.
        """
        return float(self._unpack("float64"))

    def read_bytes(self, size: int) -> bytes:
        """Read ``size`` raw bytes."""
        return self._take(size).tobytes()

    def skip(self, size: int) -> None:
        """Advance past ``size`` bytes without decoding them."""
        self._take(size)
