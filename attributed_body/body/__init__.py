"""Message body reconstruction."""

from attributed_body.body.models import (
    APP_CHAR,
    ATTACHMENT_CHAR,
    Animated,
    Animation,
    App,
    Attachment,
    BubbleComponent,
    Conversion,
    Default,
    Link,
    Mention,
    OneTimeCode,
    Retracted,
    Style,
    Styles,
    Text,
    TextAttributes,
    TextEffect,
    Unit,
)
from attributed_body.body.legacy import parse_body_legacy
from attributed_body.body.reconstruct import reconstruct
from attributed_body.body.retraction import apply_retractions
from attributed_body.body.parser import parse_body

__all__ = [
    # Components
    "BubbleComponent",
    "Text",
    "TextAttributes",
    "Attachment",
    "App",
    "Retracted",
    "APP_CHAR",
    "ATTACHMENT_CHAR",
    # Effects
    "TextEffect",
    "Default",
    "Mention",
    "Link",
    "OneTimeCode",
    "Styles",
    "Style",
    "Animated",
    "Animation",
    "Conversion",
    "Unit",
    # Parsing
    "parse_body",
    "parse_body_legacy",
    "reconstruct",
    "apply_retractions",
]
