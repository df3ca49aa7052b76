"""Typedstream archive reader.

Decodes the ``streamtyped`` archives written by ``NSArchiver`` into a flat
list of records, in archive order.

Example:
    >>> from attributed_body.typedstream import decode
    >>> records = decode(row["attributedBody"])
    >>> records[0].as_nsstring()
    'Noter test'
"""

from typing import List, Optional, Set, Union

from attributed_body.config import DecoderConfig
from attributed_body.exceptions import (
    IllegalStateException,
    InvalidHeaderException,
    RecursionLimitException,
    ResidualReservationException,
    StringDecodeException,
)
from attributed_body.typedstream.cursor import (
    ByteCursor,
    EMPTY,
    END,
    REFERENCE_TAG,
    START,
)
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
    ResolvedObject,
    SignedInteger,
    String,
    Type,
    TypeKind,
    UnsignedInteger,
)
from attributed_body.typedstream.tables import ObjectTable, TypeTable, backfill


STREAM_VERSION = 4
STREAM_SIGNATURE = "streamtyped"
SYSTEM_VERSION = 1000


class TypedStreamReader:
    """Single-use decoder for one typedstream archive.

    The reader owns the type table and the object table that back-references
    in the archive index into, so a new reader is needed for every blob.

    Args:
        data: The archive bytes.
        config: Decoder limits. Defaults to :class:`DecoderConfig`.
    """

    def __init__(self, data: bytes, config: Optional[DecoderConfig] = None):
        self._cursor = ByteCursor(data)
        self._config = config or DecoderConfig()
        self._types = TypeTable()
        self._objects = ObjectTable()
        self._seen_embedded: Set[int] = set()
        # Slot of the object whose fields have not been read yet. It survives
        # across top-level type groups until the fields arrive.
        self._reservation: Optional[int] = None
        self._depth = 0
        self._consumed = False

    @property
    def type_table(self) -> TypeTable:
        return self._types

    @property
    def object_table(self) -> ObjectTable:
        return self._objects

    def parse(self) -> List[Archivable]:
        """Decode the whole archive.

        Returns:
            The decoded records in archive order. Empty for a header-only
            archive.

        Raises:
            TypedStreamException: If the archive is malformed.
            IllegalStateException: If this reader was already used.
        """
        if self._consumed:
            raise IllegalStateException("TypedStreamReader can only be parsed once")
        self._consumed = True

        self._validate_header()

        records: List[Archivable] = []
        while not self._cursor.at_end():
            if self._cursor.current() == END:
                self._cursor.skip()
                continue

            types = self._get_type(embedded=False)
            if types is None:
                break
            record = self._read_types(types)
            if record is not None:
                records.append(record)

        residual = self._objects.finalize()
        if residual and self._config.strict_reservations:
            raise ResidualReservationException(residual)
        return records

    def _validate_header(self) -> None:
        version = self._cursor.read_unsigned_int()
        if version != STREAM_VERSION:
            raise InvalidHeaderException(f"Unsupported stream version {version}")

        try:
            signature = self._cursor.read_string()
        except StringDecodeException as e:
            raise InvalidHeaderException("Unreadable stream signature", cause=e)
        if signature != STREAM_SIGNATURE:
            raise InvalidHeaderException(f"Unexpected stream signature {signature!r}")

        system_version = self._cursor.read_signed_int()
        if system_version != SYSTEM_VERSION:
            raise InvalidHeaderException(
                f"Unsupported system version {system_version}"
            )

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > self._config.max_depth:
            raise RecursionLimitException(
                f"Nesting exceeds max_depth of {self._config.max_depth}"
            )

    def _leave(self) -> None:
        self._depth -= 1

    def _get_type(self, embedded: bool) -> Optional[List[Type]]:
        """Resolve the shape of the next value list.

        Returns:
            The value shapes, or None at the end of the current scope.
        """
        byte = self._cursor.current()
        if byte == START:
            self._cursor.skip()
            length = self._cursor.read_unsigned_int()
            types = Type.parse_literal(self._cursor.read_exact_bytes(length))
            index = self._types.append(types)
            if embedded:
                self._objects.append(CachedShape(types))
                self._seen_embedded.add(index)
            return types

        if byte == END:
            return None

        while self._cursor.has(2) and self._cursor.current() == self._cursor.peek():
            self._cursor.skip()
        index = self._cursor.read_pointer()
        types = self._types.get(index)
        if embedded and index not in self._seen_embedded:
            self._objects.append(CachedShape(types))
            self._seen_embedded.add(index)
        return types

    def _read_class(self) -> Union[int, List[Class]]:
        """Read a class chain.

        Returns:
            Either the object table index of an already-read chain, or the
            newly read classes, most derived first.
        """
        byte = self._cursor.current()
        if byte == START:
            self._enter()
            try:
                while self._cursor.current() == START:
                    self._cursor.skip()
                length = self._cursor.read_unsigned_int()
                if length >= REFERENCE_TAG:
                    return length - REFERENCE_TAG

                raw_name = self._cursor.read_exact_bytes(length)
                try:
                    name = raw_name.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise StringDecodeException(f"Invalid class name: {e}", cause=e)
                version = self._cursor.read_unsigned_int()
                self._types.append([Type.name(name)])

                chain = [Class(name, version)]
                parent = self._read_class()
                if isinstance(parent, list):
                    chain.extend(parent)
                return chain
            finally:
                self._leave()

        if byte == EMPTY:
            self._cursor.skip()
            return []

        return self._cursor.read_pointer()

    def _read_object(self) -> Optional[Archivable]:
        byte = self._cursor.current()
        if byte == START:
            result = self._read_class()
            if isinstance(result, int):
                return self._objects.get(result)
            for cls in result:
                self._objects.append(BareClass(cls))
            return None

        if byte == EMPTY:
            self._cursor.skip()
            return None

        return self._objects.get(self._cursor.read_pointer())

    def _read_embedded_data(self) -> Optional[Archivable]:
        self._enter()
        try:
            # Embedded data opens its own scope before the value shapes
            self._cursor.skip()
            types = self._get_type(embedded=True)
            if types is None:
                return None
            return self._read_types(types)
        finally:
            self._leave()

    def _read_types(self, types: List[Type]) -> Optional[Archivable]:
        """Decode one value per shape and turn them into a record."""
        values: List[OutputData] = []
        is_object = False

        for found in types:
            kind = found.kind
            if kind is TypeKind.UTF8_STRING:
                values.append(String(self._cursor.read_string()))
            elif kind is TypeKind.EMBEDDED_DATA:
                return self._read_embedded_data()
            elif kind is TypeKind.OBJECT:
                is_object = True
                slot = self._objects.reserve()
                self._reservation = slot
                record = self._read_object()
                if isinstance(record, ResolvedObject):
                    if record.data:
                        self._objects.discard_last()
                        self._reservation = None
                        return record
                    values.extend(record.data)
                elif isinstance(record, BareClass):
                    values.append(record.cls)
                elif isinstance(record, FieldGroup):
                    values.extend(record.data)
            elif kind is TypeKind.SIGNED_INT:
                values.append(SignedInteger(self._cursor.read_signed_int()))
            elif kind is TypeKind.UNSIGNED_INT:
                values.append(UnsignedInteger(self._cursor.read_unsigned_int()))
            elif kind is TypeKind.FLOAT:
                values.append(Float(self._cursor.read_float()))
            elif kind is TypeKind.DOUBLE:
                values.append(Double(self._cursor.read_double()))
            elif kind is TypeKind.STRING:
                values.append(String(found.value))
            elif kind is TypeKind.ARRAY:
                values.append(Array(self._cursor.read_array(found.value)))
            else:
                values.append(Byte(found.value))

        if self._reservation is not None and values:
            record, pending = backfill(self._objects, self._reservation, values)
            if not pending:
                self._reservation = None
                return record

        if values and not is_object:
            return FieldGroup(values)
        return None


def decode(data: bytes, config: Optional[DecoderConfig] = None) -> List[Archivable]:
    """Decode a typedstream archive into its records.

    Args:
        data: The archive bytes.
        config: Optional decoder limits.

    Returns:
        The decoded records in archive order.

    Raises:
        TypedStreamException: If the archive is malformed.
    """
    return TypedStreamReader(data, config).parse()
