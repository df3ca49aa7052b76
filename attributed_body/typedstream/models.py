"""Data model of decoded typedstream archives.

A typedstream archive is a flat sequence of type descriptions followed by
the values they describe. Decoding produces three kinds of things:

* :class:`Type` - the shape of one value, read from a type literal;
* :class:`OutputData` - a single decoded primitive value or class descriptor;
* :class:`Archivable` - one record of the decoded archive (an object, an
  anonymous group of values, or one of the transient table entries).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from attributed_body.exceptions import InvalidArrayLiteralException


NSSTRING_CLASSES = ("NSString", "NSMutableString")


class TypeKind(Enum):
    """Kind of value a type byte describes."""
    UTF8_STRING = "UTF8_STRING"
    EMBEDDED_DATA = "EMBEDDED_DATA"
    OBJECT = "OBJECT"
    SIGNED_INT = "SIGNED_INT"
    UNSIGNED_INT = "UNSIGNED_INT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    ARRAY = "ARRAY"
    UNKNOWN = "UNKNOWN"


_BYTE_KINDS = {
    0x40: TypeKind.OBJECT,
    0x2B: TypeKind.UTF8_STRING,
    0x2A: TypeKind.EMBEDDED_DATA,
    0x66: TypeKind.FLOAT,
    0x64: TypeKind.DOUBLE,
    0x63: TypeKind.SIGNED_INT,
    0x69: TypeKind.SIGNED_INT,
    0x6C: TypeKind.SIGNED_INT,
    0x71: TypeKind.SIGNED_INT,
    0x73: TypeKind.SIGNED_INT,
    0x43: TypeKind.UNSIGNED_INT,
    0x49: TypeKind.UNSIGNED_INT,
    0x4C: TypeKind.UNSIGNED_INT,
    0x51: TypeKind.UNSIGNED_INT,
    0x53: TypeKind.UNSIGNED_INT,
}

ARRAY_OPEN = 0x5B


@dataclass(frozen=True)
class Type:
    """Shape of a single archived value.

    ``value`` carries the class name for :attr:`TypeKind.STRING`, the byte
    count for :attr:`TypeKind.ARRAY` and the raw byte for
    :attr:`TypeKind.UNKNOWN`. It is ``None`` for every other kind.
    """

    kind: TypeKind
    value: object = None

    @classmethod
    def from_byte(cls, byte: int) -> "Type":
        kind = _BYTE_KINDS.get(byte)
        if kind is None:
            return cls(TypeKind.UNKNOWN, byte)
        return cls(kind)

    @classmethod
    def name(cls, class_name: str) -> "Type":
        return cls(TypeKind.STRING, class_name)

    @classmethod
    def array(cls, length: int) -> "Type":
        return cls(TypeKind.ARRAY, length)

    @classmethod
    def parse_literal(cls, literal: bytes) -> List["Type"]:
        """Map the bytes of a type literal to value shapes.

        A literal starting with ``[`` describes a single fixed-size byte
        array, e.g. ``[904c]`` is an array of 904 bytes.

        Raises:
            InvalidArrayLiteralException: If ``[`` is not followed by digits.
        """
        if literal[:1] == bytes([ARRAY_OPEN]):
            length = cls.array_length(literal)
            if length is None:
                raise InvalidArrayLiteralException(
                    f"Array literal {literal!r} has no length"
                )
            return [cls.array(length)]
        return [cls.from_byte(byte) for byte in literal]

    @staticmethod
    def array_length(literal: bytes) -> Optional[int]:
        """Read the decimal length following ``[``, or None if there is none."""
        if literal[:1] != bytes([ARRAY_OPEN]):
            return None
        digits = bytearray()
        for byte in literal[1:]:
            if not 0x30 <= byte <= 0x39:
                break
            digits.append(byte)
        if not digits:
            return None
        return int(digits.decode("ascii"))


class OutputData:
    """Base class of decoded primitive values."""


@dataclass(frozen=True)
class Class(OutputData):
    """Class descriptor: name and archived class version."""

    name: str
    version: int = 0


@dataclass(frozen=True)
class String(OutputData):
    value: str


@dataclass(frozen=True)
class SignedInteger(OutputData):
    value: int


@dataclass(frozen=True)
class UnsignedInteger(OutputData):
    value: int


@dataclass(frozen=True)
class Float(OutputData):
    value: float


@dataclass(frozen=True)
class Double(OutputData):
    value: float


@dataclass(frozen=True)
class Byte(OutputData):
    value: int


@dataclass(frozen=True)
class Array(OutputData):
    value: bytes


class Archivable:
    """Base class of decoded records and object table entries."""

    def as_nsstring(self) -> Optional[str]:
        """Get the text held by this record if it is an archived string."""
        return None

    def as_number(self):
        """Get the first numeric value held by this record, if any."""
        return None


def _first_number(data: List[OutputData]):
    for item in data:
        if isinstance(item, (SignedInteger, UnsignedInteger, Float, Double)):
            return item.value
    return None


@dataclass
class ResolvedObject(Archivable):
    """An archived object instance with its class and decoded fields."""

    cls: Class
    data: List[OutputData] = field(default_factory=list)

    def as_nsstring(self) -> Optional[str]:
        if self.cls.name in NSSTRING_CLASSES and self.data:
            first = self.data[0]
            if isinstance(first, String):
                return first.value
        return None

    def as_number(self):
        if self.cls.name == "NSNumber":
            return _first_number(self.data)
        return None


@dataclass
class FieldGroup(Archivable):
    """Values not owned by any object, such as an attribute run."""

    data: List[OutputData] = field(default_factory=list)

    def as_nsstring(self) -> Optional[str]:
        if self.data and isinstance(self.data[0], String):
            return self.data[0].value
        return None

    def as_number(self):
        return _first_number(self.data)


@dataclass
class BareClass(Archivable):
    """One link of a class chain whose instance data has not been read."""

    cls: Class


@dataclass
class Reservation(Archivable):
    """Object table slot held for an object still being decoded."""


@dataclass
class CachedShape(Archivable):
    """Type list mirrored into the object table by embedded data."""

    types: List[Type] = field(default_factory=list)
