"""Body components from plain text alone.

Used when a message has no ``attributedBody`` or it cannot be decoded. The
text still marks where attachments and app integrations sit with
placeholder characters, so only the default effect is recoverable.
"""

from typing import List, Optional

from attributed_body.body.models import (
    APP_CHAR,
    ATTACHMENT_CHAR,
    App,
    Attachment,
    BubbleComponent,
    Default,
    Text,
    TextAttributes,
)


def _text(start: int, end: int) -> Text:
    return Text([TextAttributes(start, end, Default())])


def parse_body_legacy(text: Optional[str]) -> List[BubbleComponent]:
    """Split text at placeholder characters.

    The placeholder itself is not part of either neighbouring text range.

    Example:
        >>> parse_body_legacy("\\ufffcHello")
        [Attachment(guid='', ...), Text(attributes=[TextAttributes(start=1, end=6, ...)])]
    """
    components: List[BubbleComponent] = []
    if not text:
        return components

    start = 0
    for index, char in enumerate(text):
        if char == ATTACHMENT_CHAR:
            marker: BubbleComponent = Attachment()
        elif char == APP_CHAR:
            marker = App()
        else:
            continue
        if start < index:
            components.append(_text(start, index))
        components.append(marker)
        start = index + 1

    if start < len(text):
        components.append(_text(start, len(text)))
    return components
