"""Rebuild a message body from decoded ``NSAttributedString`` records.

An archived attributed string decodes to the plain text followed by one
entry per attribute run::

    ResolvedObject(NSMutableString, ["Test Dad "])      # the text
    FieldGroup([SignedInteger(1), UnsignedInteger(5)])  # run: attributes #1, 5 chars
    ResolvedObject(NSDictionary, [SignedInteger(1)])    # attributes #1: one pair
    ResolvedObject(NSString, ["__kIMMessagePartAttributeName"])
    ResolvedObject(NSNumber, [SignedInteger(0)])
    FieldGroup([SignedInteger(2), UnsignedInteger(3)])  # run: attributes #2, 3 chars
    ...
    FieldGroup([SignedInteger(1), UnsignedInteger(1)])  # run: attributes #1 again

Runs are contiguous, so each run starts where the previous one ended. A
dictionary is archived only the first time its attributes are used; later
runs with the same attribute index refer back to it.
"""

import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from attributed_body.config import BodyConfig
from attributed_body.body.models import (
    Animated,
    Animation,
    Attachment,
    BubbleComponent,
    Conversion,
    Default,
    Link,
    Mention,
    OneTimeCode,
    Style,
    Styles,
    Text,
    TextAttributes,
    TextEffect,
    Unit,
)
from attributed_body.typedstream.models import (
    Archivable,
    Array,
    FieldGroup,
    ResolvedObject,
    SignedInteger,
    UnsignedInteger,
)


ATTACHMENT_KEY = "__kIMFileTransferGUIDAttributeName"
FILENAME_KEY = "__kIMFilenameAttributeName"
INLINE_HEIGHT_KEY = "__kIMInlineMediaHeightAttributeName"
INLINE_WIDTH_KEY = "__kIMInlineMediaWidthAttributeName"
TRANSCRIPTION_KEY = "__kIMAudioTranscription"
MENTION_KEY = "__kIMMentionConfirmedMention"
LINK_KEY = "__kIMLinkAttributeName"
ONE_TIME_CODE_KEY = "__kIMOneTimeCodeAttributeName"
CALENDAR_EVENT_KEY = "__kIMCalendarEventAttributeName"
TEXT_EFFECT_KEY = "__kIMTextEffectAttributeName"
MESSAGE_PART_KEY = "__kIMMessagePartAttributeName"

STYLE_KEYS = {
    "__kIMTextBoldAttributeName": Style.BOLD,
    "__kIMTextItalicAttributeName": Style.ITALIC,
    "__kIMTextStrikethroughAttributeName": Style.STRIKETHROUGH,
    "__kIMTextUnderlineAttributeName": Style.UNDERLINE,
}

DATA_CLASSES = ("NSData", "NSMutableData")


@dataclass(frozen=True)
class RunAttributes:
    """What one attribute dictionary says about the runs that use it."""

    effect: TextEffect
    part: Optional[int] = None
    attachment: Optional[Attachment] = None


DEFAULT_RUN = RunAttributes(Default())


def get_range(record: Archivable) -> Optional[Tuple[int, int]]:
    """Get ``(attribute index, length)`` if the record is an attribute run."""
    if not isinstance(record, FieldGroup) or len(record.data) != 2:
        return None
    index, length = record.data
    if isinstance(index, SignedInteger) and isinstance(length, UnsignedInteger):
        return index.value, length.value
    return None


def get_dictionary_size(record: Archivable) -> Optional[int]:
    """Get the number of key/value pairs if the record is an NSDictionary."""
    if not isinstance(record, ResolvedObject) or record.cls.name != "NSDictionary":
        return None
    if record.data and isinstance(record.data[0], (SignedInteger, UnsignedInteger)):
        return max(record.data[0].value, 0)
    return None


def _owns_next(value: Archivable, following: Archivable) -> bool:
    # Some values archive a second object right after themselves
    if not isinstance(value, ResolvedObject):
        return False
    if value.cls.name == "NSURL":
        return following.as_nsstring() is not None
    if value.cls.name in DATA_CLASSES:
        return isinstance(following, FieldGroup) and any(
            isinstance(item, Array) for item in following.data
        )
    return False


def read_pairs(
    records: Sequence[Archivable], index: int, count: int
) -> Tuple[List[Tuple[Optional[str], List[Archivable]]], int]:
    """Read ``count`` dictionary entries starting at ``records[index]``.

    Returns:
        The ``(key, value records)`` pairs and the index after the last one.
    """
    pairs = []
    for _ in range(count):
        if index + 1 >= len(records):
            break
        key = records[index].as_nsstring()
        value = [records[index + 1]]
        index += 2
        if index < len(records) and _owns_next(value[0], records[index]):
            value.append(records[index])
            index += 1
        pairs.append((key, value))
    return pairs, index


def _as_int(record: Archivable) -> Optional[int]:
    number = record.as_number()
    if number is None or not math.isfinite(number):
        return None
    return int(number)


def resolve_attributes(
    pairs: Sequence[Tuple[Optional[str], List[Archivable]]]
) -> RunAttributes:
    """Turn the entries of one attribute dictionary into run attributes."""
    effect: Optional[TextEffect] = None
    styles: List[Style] = []
    part = None
    attachment_fields: Dict[str, object] = {}

    for key, value in pairs:
        head = value[0]
        if key == ATTACHMENT_KEY:
            attachment_fields["guid"] = head.as_nsstring() or ""
        elif key == FILENAME_KEY:
            attachment_fields["name"] = head.as_nsstring()
        elif key == INLINE_HEIGHT_KEY:
            attachment_fields["height"] = head.as_number()
        elif key == INLINE_WIDTH_KEY:
            attachment_fields["width"] = head.as_number()
        elif key == TRANSCRIPTION_KEY:
            attachment_fields["transcription"] = head.as_nsstring()
        elif key == MESSAGE_PART_KEY:
            part = _as_int(head)
        elif key in STYLE_KEYS:
            styles.append(STYLE_KEYS[key])
        elif effect is not None:
            continue
        elif key == MENTION_KEY:
            effect = Mention(head.as_nsstring() or "")
        elif key == LINK_KEY:
            effect = Link(value[-1].as_nsstring() or "")
        elif key == ONE_TIME_CODE_KEY:
            effect = OneTimeCode()
        elif key == CALENDAR_EVENT_KEY:
            effect = Conversion(Unit.TIMEZONE)
        elif key == TEXT_EFFECT_KEY:
            animation_id = _as_int(head)
            if animation_id is not None:
                effect = Animated(Animation.from_id(animation_id), animation_id)

    attachment = None
    if "guid" in attachment_fields:
        attachment = Attachment(**attachment_fields)

    if effect is None:
        effect = Styles(tuple(styles)) if styles else Default()
    return RunAttributes(effect, part, attachment)


def reconstruct(
    records: Sequence[Archivable],
    text: Optional[str],
    config: Optional[BodyConfig] = None,
) -> Optional[List[BubbleComponent]]:
    """Rebuild the body components of a message.

    Args:
        records: Records decoded from the message's ``attributedBody``.
        text: The plain text of the message.
        config: Body options. Defaults to :class:`BodyConfig`.

    Returns:
        The components in order, or None if no component could be built.
    """
    if text is None or not records:
        return None
    config = config or BodyConfig()

    # Archived offsets count characters, the same unit str indexes by
    text_length = len(text)
    components: List[BubbleComponent] = []
    known: Dict[int, RunAttributes] = {}
    open_text: Optional[Text] = None
    open_part: Optional[int] = None
    offset = 0

    index = 1
    while index < len(records):
        run = get_range(records[index])
        index += 1
        if run is None:
            continue

        attribute_index, length = run
        start = min(offset, text_length)
        offset += length
        end = min(offset, text_length)

        size = get_dictionary_size(records[index]) if index < len(records) else None
        if size is not None:
            pairs, index = read_pairs(records, index + 1, size)
            attributes = resolve_attributes(pairs)
            known[attribute_index] = attributes
        else:
            attributes = known.get(attribute_index, DEFAULT_RUN)

        if attributes.attachment is not None:
            components.append(replace(attributes.attachment))
            open_text = None
            continue

        new_part = (
            config.split_message_parts
            and attributes.part is not None
            and open_part is not None
            and attributes.part != open_part
        )
        if open_text is None or new_part:
            open_text = Text()
            components.append(open_text)
            open_part = attributes.part
        elif open_part is None:
            open_part = attributes.part
        open_text.attributes.append(TextAttributes(start, end, attributes.effect))

    return components or None
