"""Unit tests for attributed_body.typedstream.cursor module."""

import struct

import pytest

from attributed_body.exceptions import (
    InvalidBackReferenceException,
    OutOfBoundsException,
    StringDecodeException,
)
from attributed_body.typedstream.cursor import ByteCursor


class TestIntegers:
    """Tests for tagged integer reads."""

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"\x05", 5),
            (b"\x7f", 127),
            (b"\x92", 0x92),
            (b"\x81\x58\x02", 600),
            (b"\x81\xff\xff", 0xFFFF),
            (b"\x82\x00\x00\x01\x00", 65536),
        ],
    )
    def test_read_unsigned_int(self, data, expected):
        cursor = ByteCursor(data)
        assert cursor.read_unsigned_int() == expected
        assert cursor.at_end()

    @pytest.mark.parametrize(
        "data,expected",
        [
            (b"\x01", 1),
            (b"\xff", -1),
            (b"\x80", -128),
            (b"\x81\x58\x02", 600),
            (b"\x81\xff\xff", -1),
            (b"\x82\xfe\xff\xff\xff", -2),
        ],
    )
    def test_read_signed_int(self, data, expected):
        cursor = ByteCursor(data)
        assert cursor.read_signed_int() == expected
        assert cursor.at_end()

    def test_truncated_wide_int(self):
        cursor = ByteCursor(b"\x81\x01")
        with pytest.raises(OutOfBoundsException):
            cursor.read_unsigned_int()


class TestFloats:
    """Tests for float and double reads."""

    def test_read_float_decimal(self):
        cursor = ByteCursor(b"\x83" + struct.pack("<f", 1.5))
        assert cursor.read_float() == 1.5
        assert cursor.at_end()

    def test_read_double_decimal(self):
        cursor = ByteCursor(b"\x83" + struct.pack("<d", 1139.0))
        assert cursor.read_double() == 1139.0
        assert cursor.at_end()

    def test_read_double_from_wide_int(self):
        cursor = ByteCursor(b"\x81\x58\x02")
        value = cursor.read_double()
        assert value == 600.0
        assert isinstance(value, float)

    def test_read_float_from_single_byte(self):
        cursor = ByteCursor(b"\x07")
        assert cursor.read_float() == 7.0
        assert cursor.at_end()

    def test_truncated_double(self):
        cursor = ByteCursor(b"\x83\x00\x00")
        with pytest.raises(OutOfBoundsException):
            cursor.read_double()


class TestStrings:
    """Tests for string and byte reads."""

    def test_read_string(self):
        cursor = ByteCursor(b"\x05hello!")
        assert cursor.read_string() == "hello"
        assert cursor.remaining() == 1

    def test_read_multibyte_string(self):
        data = "\ufffcHi".encode("utf-8")
        cursor = ByteCursor(bytes([len(data)]) + data)
        assert cursor.read_string() == "\ufffcHi"

    def test_invalid_utf8(self):
        cursor = ByteCursor(b"\x02\xff\xfe")
        with pytest.raises(StringDecodeException):
            cursor.read_string()

    def test_string_past_end(self):
        cursor = ByteCursor(b"\x09abc")
        with pytest.raises(OutOfBoundsException) as info:
            cursor.read_string()
        assert info.value.length == 4

    def test_read_array(self):
        cursor = ByteCursor(b"\x01\x02\x03")
        assert cursor.read_array(2) == b"\x01\x02"
        assert cursor.position == 2


class TestNavigation:
    """Tests for peeking, skipping and pointers."""

    def test_current_does_not_consume(self):
        cursor = ByteCursor(b"\x84\x01")
        assert cursor.current() == 0x84
        assert cursor.position == 0

    def test_peek(self):
        cursor = ByteCursor(b"\x9b\x9b\x00")
        assert cursor.peek() == 0x9B
        assert cursor.peek(2) == 0x00
        with pytest.raises(OutOfBoundsException):
            cursor.peek(3)

    def test_current_at_end(self):
        cursor = ByteCursor(b"")
        assert cursor.at_end()
        with pytest.raises(OutOfBoundsException):
            cursor.current()

    def test_skip_past_end(self):
        cursor = ByteCursor(b"\x00")
        with pytest.raises(OutOfBoundsException):
            cursor.skip(2)

    def test_read_pointer(self):
        cursor = ByteCursor(b"\x92\x9b")
        assert cursor.read_pointer() == 0
        assert cursor.read_pointer() == 9

    def test_read_pointer_below_threshold(self):
        cursor = ByteCursor(b"\x50")
        with pytest.raises(InvalidBackReferenceException):
            cursor.read_pointer()
