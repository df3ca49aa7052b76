"""Typedstream (``NSArchiver``) deserialization."""

from attributed_body.typedstream.models import (
    Archivable,
    Array,
    BareClass,
    Byte,
    CachedShape,
    Class,
    Double,
    FieldGroup,
    Float,
    OutputData,
    Reservation,
    ResolvedObject,
    SignedInteger,
    String,
    Type,
    TypeKind,
    UnsignedInteger,
)
from attributed_body.typedstream.reader import TypedStreamReader, decode

__all__ = [
    "Archivable",
    "Array",
    "BareClass",
    "Byte",
    "CachedShape",
    "Class",
    "Double",
    "FieldGroup",
    "Float",
    "OutputData",
    "Reservation",
    "ResolvedObject",
    "SignedInteger",
    "String",
    "Type",
    "TypeKind",
    "UnsignedInteger",
    "TypedStreamReader",
    "decode",
]
