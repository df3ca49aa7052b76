"""Plain-text extraction from ``streamtyped`` blobs without full decoding.

This predates the typedstream reader and only recovers the first archived
string. It is kept as a fallback for blobs the reader rejects.
"""

from attributed_body.exceptions import NoEndPatternException, NoStartPatternException


# NSString class data starts with a one-element "+" type literal
START_PATTERN = b"\x01\x2b"
# End of the string object, start of the next scope
END_PATTERN = b"\x86\x84"


def parse(stream: bytes) -> str:
    """Extract the first archived string.

    Raises:
        NoStartPatternException: If no string type literal is found.
        NoEndPatternException: If the string is not terminated.
    """
    start = stream.find(START_PATTERN)
    if start == -1:
        raise NoStartPatternException("No string type literal in stream")
    stream = stream[start + len(START_PATTERN):]

    end = stream.find(END_PATTERN, 1)
    if end == -1:
        raise NoEndPatternException("String is not terminated")
    stream = stream[:end]

    try:
        text = stream.decode("utf-8")
    except UnicodeDecodeError:
        # Multi-byte length prefix, decoded as three characters
        return stream.decode("utf-8", errors="replace")[3:]
    # Single-byte length prefix
    return text[1:]
