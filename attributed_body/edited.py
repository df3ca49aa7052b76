"""Edit and unsend history of a message.

Messages that were edited or unsent carry a property list in their
``message_summary_info`` column::

    {
        "otr": {"0": {...}, "1": {...}},        # one entry per message part
        "ec": {                                 # edit history per part
            "0": [
                {"d": 1685052000, "t": b"streamtyped...", "bcg": "GUID"},
                {"d": 1685052060, "t": b"streamtyped..."},
            ],
        },
        "rp": [1],                              # unsent part indexes
    }

Every ``t`` payload is a typedstream archive of the text of that revision.
"""

import math
import plistlib
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from xml.parsers.expat import ExpatError

from attributed_body import streamtyped
from attributed_body.config import DecoderConfig
from attributed_body.exceptions import (
    PlistParseException,
    StreamTypedException,
    TypedStreamException,
)
from attributed_body.logging import get_logger
from attributed_body.typedstream import Archivable, decode


_logger = get_logger("edited")

# Edit dates are stored in seconds, message dates in nanoseconds
TIMESTAMP_FACTOR = 1_000_000_000


class EditStatus(Enum):
    """What happened to a message part after it was sent."""
    EDITED = "EDITED"
    UNSENT = "UNSENT"
    ORIGINAL = "ORIGINAL"


@dataclass
class EditedEvent:
    """One revision of a message part.

    Attributes:
        date: Revision time, in the nanosecond unit of message dates.
        text: Text of the revision, if it could be recovered.
        components: Records decoded from the revision, if it decoded.
        guid: GUID of the message the revision was sent as, if any.
    """

    date: int
    text: Optional[str] = None
    components: Optional[List[Archivable]] = None
    guid: Optional[str] = None


@dataclass
class EditedMessagePart:
    status: EditStatus = EditStatus.ORIGINAL
    edit_history: List[EditedEvent] = field(default_factory=list)


class EditedMessage:
    """Per-part edit status of a message."""

    def __init__(self, parts: Optional[List[EditedMessagePart]] = None):
        self._parts = list(parts or [])

    @property
    def parts(self) -> List[EditedMessagePart]:
        return self._parts

    def part(self, index: int) -> Optional[EditedMessagePart]:
        if 0 <= index < len(self._parts):
            return self._parts[index]
        return None

    def is_unedited_at(self, index: int) -> bool:
        """Check whether the part at ``index`` exists and is unchanged."""
        part = self.part(index)
        return part is not None and part.status is EditStatus.ORIGINAL

    def items(self) -> int:
        """Get the number of message parts."""
        return len(self._parts)

    def unsent_indexes(self) -> List[int]:
        """Get the indexes of unsent parts, ascending."""
        return [
            index for index, part in enumerate(self._parts)
            if part.status is EditStatus.UNSENT
        ]

    def _ensure_part(self, index: int) -> EditedMessagePart:
        while len(self._parts) <= index:
            self._parts.append(EditedMessagePart())
        return self._parts[index]

    @classmethod
    def from_bytes(
        cls, data: bytes, config: Optional[DecoderConfig] = None
    ) -> "EditedMessage":
        """Parse a ``message_summary_info`` property list.

        Raises:
            PlistParseException: If the data is not a valid property list.
        """
        try:
            payload = plistlib.loads(data)
        except (plistlib.InvalidFileException, ValueError, ExpatError) as e:
            raise PlistParseException(f"Invalid property list: {e}", cause=e)
        return cls.from_map(payload, config)

    @classmethod
    def from_map(
        cls, payload: dict, config: Optional[DecoderConfig] = None
    ) -> "EditedMessage":
        """Build the edit status from a loaded ``message_summary_info``.

        Args:
            payload: The property list root dictionary.
            config: Decoder limits for the revision payloads.

        Raises:
            PlistParseException: If the payload has an unexpected structure.
        """
        if not isinstance(payload, dict):
            raise PlistParseException("Property list root is not a dictionary")

        parts = payload.get("otr")
        if not isinstance(parts, dict):
            raise PlistParseException("Missing 'otr' dictionary")
        message = cls([EditedMessagePart() for _ in range(len(parts))])

        edits = payload.get("ec", {})
        if not isinstance(edits, dict):
            raise PlistParseException("'ec' is not a dictionary")
        for key, events in edits.items():
            if not isinstance(events, list):
                raise PlistParseException(f"History of part {key!r} is not an array")
            part = message._ensure_part(_part_index(key))
            part.status = EditStatus.EDITED
            for event in events:
                part.edit_history.append(_parse_event(event, config))

        unsent = payload.get("rp", [])
        if not isinstance(unsent, list):
            raise PlistParseException("'rp' is not an array")
        for value in unsent:
            message._ensure_part(_part_index(value)).status = EditStatus.UNSENT

        return message


def _part_index(value) -> int:
    if isinstance(value, bool):
        raise PlistParseException(f"Invalid part index {value!r}")
    try:
        index = int(value)
    except (TypeError, ValueError) as e:
        raise PlistParseException(f"Invalid part index {value!r}", cause=e)
    if index < 0:
        raise PlistParseException(f"Invalid part index {value!r}")
    return index


def _parse_event(event, config: Optional[DecoderConfig]) -> EditedEvent:
    if not isinstance(event, dict):
        raise PlistParseException("Edit event is not a dictionary")

    seconds = event.get("d")
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise PlistParseException("Edit event has no 'd' timestamp")
    if not math.isfinite(seconds):
        raise PlistParseException(f"Edit event timestamp {seconds!r} is not finite")

    blob = event.get("t")
    if not isinstance(blob, bytes):
        raise PlistParseException("Edit event has no 't' payload")

    guid = event.get("bcg")
    text, components = _revision_text(blob, config)
    return EditedEvent(
        date=int(seconds * TIMESTAMP_FACTOR),
        text=text,
        components=components,
        guid=guid if isinstance(guid, str) else None,
    )


def _revision_text(
    blob: bytes, config: Optional[DecoderConfig]
) -> Tuple[Optional[str], Optional[List[Archivable]]]:
    try:
        components = decode(blob, config)
    except TypedStreamException as e:
        _logger.debug("Revision is not a readable typedstream: %s", e)
        components = None

    if components:
        text = components[0].as_nsstring()
        if text is not None:
            return text, components

    try:
        return streamtyped.parse(blob), components
    except StreamTypedException as e:
        _logger.debug("No text recovered from revision: %s", e)
        return None, components
