"""Type and object tables shared by back-references within one archive.

Both tables are append-only while decoding, so an index handed out once
stays valid for the rest of the archive. The object table additionally
lets a reserved slot be overwritten once the object it stands for is
known; :func:`backfill` decides what a reserved slot becomes.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from attributed_body.exceptions import InvalidBackReferenceException
from attributed_body.typedstream.models import (
    Archivable,
    BareClass,
    Class,
    FieldGroup,
    OutputData,
    Reservation,
    ResolvedObject,
    Type,
)


class TypeTable:
    """Type lists in the order their literals appear in the archive."""

    def __init__(self):
        self._entries: List[List[Type]] = []

    def append(self, types: List[Type]) -> int:
        self._entries.append(types)
        return len(self._entries) - 1

    def get(self, index: int) -> List[Type]:
        if index < 0 or index >= len(self._entries):
            raise InvalidBackReferenceException(index, len(self._entries))
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[List[Type]]:
        return iter(self._entries)


class ObjectTable:
    """Objects, classes and reservations in archive order."""

    def __init__(self):
        self._entries: List[Archivable] = []

    def append(self, entry: Archivable) -> int:
        self._entries.append(entry)
        return len(self._entries) - 1

    def reserve(self) -> int:
        """Append a reservation and return its slot."""
        return self.append(Reservation())

    def discard_last(self) -> None:
        self._entries.pop()

    def get(self, index: int) -> Archivable:
        if index < 0 or index >= len(self._entries):
            raise InvalidBackReferenceException(index, len(self._entries))
        return self._entries[index]

    def peek(self, index: int) -> Optional[Archivable]:
        """Get the entry at ``index``, or None if there is none yet."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def __getitem__(self, index: int) -> Archivable:
        return self._entries[index]

    def __setitem__(self, index: int, entry: Archivable) -> None:
        self._entries[index] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Archivable]:
        return iter(self._entries)

    def reservations(self) -> List[int]:
        """Get the slots still holding a reservation."""
        return [
            index for index, entry in enumerate(self._entries)
            if isinstance(entry, Reservation)
        ]

    def finalize(self) -> List[int]:
        """Resolve reservations left in front of a class chain.

        The root object of an archive owns the rest of the stream rather
        than a value list of its own, so its slot is never filled while
        decoding. A reservation directly followed by a bare class becomes
        an empty instance of that class.

        Returns:
            The slots that are still reservations afterwards.
        """
        for index in self.reservations():
            following = self.peek(index + 1)
            if isinstance(following, BareClass):
                self._entries[index] = ResolvedObject(following.cls, [])
        return self.reservations()


def backfill(
    table: ObjectTable, slot: int, values: Sequence[OutputData]
) -> Tuple[Optional[Archivable], bool]:
    """Fill a reserved object slot with freshly decoded values.

    Args:
        table: The object table holding the reservation.
        slot: Index of the reserved slot.
        values: Values decoded since the reservation was made. Must not
            be empty.

    Returns:
        A ``(record, pending)`` pair. ``record`` is the record to emit, if
        any. ``pending`` tells whether the slot is still waiting for data.
    """
    last = values[-1]
    if isinstance(last, Class):
        # Class head only; field values follow in a later type group
        table[slot] = ResolvedObject(last, [])
        return None, True

    following = table.peek(slot + 1)
    if isinstance(following, BareClass):
        table[slot] = ResolvedObject(following.cls, list(values))
        return table[slot], False

    current = table[slot]
    if isinstance(current, ResolvedObject):
        current.data.extend(values)
        return current, False

    table[slot] = FieldGroup(list(values))
    return table[slot], False
