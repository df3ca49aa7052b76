"""attributed-body exceptions.

This module defines the exception hierarchy for the attributed-body
package. All exceptions inherit from :class:`AttributedBodyException`.

Example:
    Handling decoder exceptions::

        from attributed_body import decode
        from attributed_body.exceptions import (
            AttributedBodyException,
            InvalidHeaderException,
            TypedStreamException,
        )

        try:
            records = decode(blob)
        except InvalidHeaderException:
            print("Not a typedstream archive")
        except TypedStreamException as e:
            print(f"Corrupt archive: {e}")
"""


class AttributedBodyException(Exception):
    """Base class for all attributed-body exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.

    Example:
        >>> try:
        ...     decode(b"garbage")
        ... except AttributedBodyException as e:
        ...     print(f"Error: {e}")
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class IllegalStateException(AttributedBodyException):
    """Raised when an operation is invoked on an illegal state.

    Example:
        - Calling ``parse()`` twice on the same reader
    """
    pass


class ConfigurationException(AttributedBodyException):
    """Raised when there is a configuration error.

    Example:
        - Non-positive recursion depth
        - Unreadable or malformed YAML configuration file
    """
    pass


class TypedStreamException(AttributedBodyException):
    """Base class for errors raised while decoding a typedstream archive.

    Decoding errors are terminal for the call that raised them. No partial
    record list is returned.
    """
    pass


class OutOfBoundsException(TypedStreamException):
    """Raised when a read runs past the end of the buffer.

    Args:
        index: The offset that was requested.
        length: The length of the buffer.

    Attributes:
        index: The offset that was requested.
        length: The length of the buffer.
    """

    def __init__(self, index: int, length: int, cause: Exception = None):
        super().__init__(
            f"Index {index} is outside of range {length}", cause
        )
        self._index = index
        self._length = length

    @property
    def index(self) -> int:
        """Get the offending offset."""
        return self._index

    @property
    def length(self) -> int:
        """Get the buffer length."""
        return self._length


class InvalidHeaderException(TypedStreamException):
    """Raised when the archive does not start with a valid typedstream header."""
    pass


class NumericConversionException(TypedStreamException):
    """Raised when a fixed-width number cannot be unpacked."""
    pass


class StringDecodeException(TypedStreamException):
    """Raised when a string payload is not valid UTF-8."""
    pass


class InvalidArrayLiteralException(TypedStreamException):
    """Raised when an array type literal carries no decimal length."""
    pass


class InvalidBackReferenceException(TypedStreamException):
    """Raised when a back-reference points outside of its table.

    Args:
        index: The referenced table index.
        length: The table length at read time.

    Attributes:
        index: The referenced table index.
        length: The table length at read time.
    """

    def __init__(self, index: int, length: int, cause: Exception = None):
        super().__init__(
            f"Back-reference {index} is not in table of length {length}", cause
        )
        self._index = index
        self._length = length

    @property
    def index(self) -> int:
        """Get the referenced index."""
        return self._index

    @property
    def length(self) -> int:
        """Get the table length."""
        return self._length


class RecursionLimitException(TypedStreamException):
    """Raised when class chains or embedded data nest deeper than allowed."""
    pass


class ResidualReservationException(TypedStreamException):
    """Raised by a strict reader when an object slot is never filled.

    Args:
        slots: Indexes of the object table still holding a reservation.

    Attributes:
        slots: Indexes of the object table still holding a reservation.
    """

    def __init__(self, slots, cause: Exception = None):
        super().__init__(f"Unresolved object slots: {list(slots)}", cause)
        self.slots = list(slots)


class StreamTypedException(AttributedBodyException):
    """Base class for errors of the legacy plain-text streamtyped decoder."""
    pass


class NoStartPatternException(StreamTypedException):
    """Raised when the string start marker is missing."""
    pass


class NoEndPatternException(StreamTypedException):
    """Raised when the string end marker is missing."""
    pass


class PlistParseException(AttributedBodyException):
    """Raised when an edit-history property list is malformed.

    Example:
        - Missing ``otr`` dictionary
        - A part index that is not an integer
        - An event without a ``t`` payload
    """
    pass
