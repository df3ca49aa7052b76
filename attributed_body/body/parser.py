"""Message body parsing: decode, reconstruct, fall back, overlay."""

from typing import List, Optional

from attributed_body.body.legacy import parse_body_legacy
from attributed_body.body.models import BubbleComponent
from attributed_body.body.reconstruct import reconstruct
from attributed_body.body.retraction import apply_retractions
from attributed_body.config import AttributedBodyConfig
from attributed_body.edited import EditedMessage
from attributed_body.exceptions import TypedStreamException
from attributed_body.logging import get_logger
from attributed_body.typedstream import decode


_logger = get_logger("body")


def parse_body(
    text: Optional[str],
    attributed_body: Optional[bytes] = None,
    edited: Optional[EditedMessage] = None,
    config: Optional[AttributedBodyConfig] = None,
) -> List[BubbleComponent]:
    """Build the body components of one message.

    Args:
        text: The message's plain text. When None, the text archived in
            ``attributed_body`` is used.
        attributed_body: The message's ``attributedBody`` blob, if any.
        edited: Edit history of the message, if any. Unsent parts are
            marked with :class:`~attributed_body.body.models.Retracted`.
        config: Options. Defaults to :class:`AttributedBodyConfig`.

    Returns:
        The body components in display order.

    Raises:
        TypedStreamException: If the blob cannot be decoded and the legacy
            fallback is disabled.
    """
    config = config or AttributedBodyConfig()
    components = None

    if attributed_body:
        try:
            records = decode(attributed_body, config.decoder)
        except TypedStreamException as e:
            if not config.body.legacy_fallback:
                raise
            _logger.debug("Unable to decode attributedBody, using plain text: %s", e)
        else:
            if text is None and records:
                text = records[0].as_nsstring()
            components = reconstruct(records, text, config.body)
            if components is None:
                _logger.debug("No attribute runs in attributedBody, using plain text")

    if components is None:
        components = parse_body_legacy(text) if config.body.legacy_fallback else []

    if edited is not None:
        components = apply_retractions(components, edited)
    return components
