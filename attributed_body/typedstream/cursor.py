"""Byte cursor over a typedstream buffer."""

import struct

from attributed_body.exceptions import (
    InvalidBackReferenceException,
    NumericConversionException,
    OutOfBoundsException,
    StringDecodeException,
)


# Integer and float tags
I_16 = 0x81
I_32 = 0x82
DECIMAL = 0x83

# Scope markers
START = 0x84
EMPTY = 0x85
END = 0x86

# Bytes at or above this value index an already-read type or object
REFERENCE_TAG = 0x92


class ByteCursor:
    """Reads typedstream primitives from an immutable buffer.

    All reads advance the cursor. Reads past the end of the buffer raise
    :class:`~attributed_body.exceptions.OutOfBoundsException`.
    """

    def __init__(self, buffer: bytes):
        self._buffer = bytes(buffer)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def __len__(self) -> int:
        return len(self._buffer)

    def remaining(self) -> int:
        return len(self._buffer) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._buffer)

    def _check(self, size: int) -> None:
        if size < 0 or self._pos + size > len(self._buffer):
            raise OutOfBoundsException(self._pos + size, len(self._buffer))

    def current(self) -> int:
        """Get the byte under the cursor without consuming it."""
        self._check(1)
        return self._buffer[self._pos]

    def peek(self, offset: int = 1) -> int:
        """Get the byte ``offset`` bytes past the cursor without consuming it."""
        index = self._pos + offset
        if index >= len(self._buffer):
            raise OutOfBoundsException(index, len(self._buffer))
        return self._buffer[index]

    def has(self, count: int) -> bool:
        return self._pos + count <= len(self._buffer)

    def skip(self, count: int = 1) -> None:
        self._check(count)
        self._pos += count

    def _unpack(self, fmt: str, size: int):
        self._check(size)
        try:
            value = struct.unpack_from(fmt, self._buffer, self._pos)[0]
        except struct.error as e:
            raise NumericConversionException(str(e), cause=e)
        self._pos += size
        return value

    def read_byte(self) -> int:
        value = self.current()
        self._pos += 1
        return value

    def read_exact_bytes(self, size: int) -> bytes:
        self._check(size)
        data = self._buffer[self._pos:self._pos + size]
        self._pos += size
        return data

    def read_unsigned_int(self) -> int:
        tag = self.read_byte()
        if tag == I_16:
            return self._unpack("<H", 2)
        if tag == I_32:
            return self._unpack("<I", 4)
        return tag

    def read_signed_int(self) -> int:
        tag = self.read_byte()
        if tag == I_16:
            return self._unpack("<h", 2)
        if tag == I_32:
            return self._unpack("<i", 4)
        return tag - 0x100 if tag > 0x7F else tag

    def read_float(self) -> float:
        tag = self.current()
        if tag == DECIMAL:
            self._pos += 1
            return self._unpack("<f", 4)
        return float(self.read_signed_int())

    def read_double(self) -> float:
        tag = self.current()
        if tag == DECIMAL:
            self._pos += 1
            return self._unpack("<d", 8)
        return float(self.read_signed_int())

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string."""
        length = self.read_unsigned_int()
        data = self.read_exact_bytes(length)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StringDecodeException(f"Invalid UTF-8 string: {e}", cause=e)

    def read_array(self, size: int) -> bytes:
        return self.read_exact_bytes(size)

    def read_pointer(self) -> int:
        """Consume a reference byte and return the table index it encodes."""
        byte = self.read_byte()
        if byte < REFERENCE_TAG:
            raise InvalidBackReferenceException(byte - REFERENCE_TAG, 0)
        return byte - REFERENCE_TAG
