"""Decode iMessage ``attributedBody`` typedstream archives."""

from attributed_body.exceptions import (
    AttributedBodyException,
    ConfigurationException,
    IllegalStateException,
    InvalidBackReferenceException,
    InvalidHeaderException,
    OutOfBoundsException,
    PlistParseException,
    StreamTypedException,
    TypedStreamException,
)
from attributed_body.config import AttributedBodyConfig, BodyConfig, DecoderConfig
from attributed_body.logging import (
    configure_logging,
    disable_logging,
    enable_logging,
    get_logger,
    set_level,
)
from attributed_body.typedstream import TypedStreamReader, decode
from attributed_body.edited import (
    EditedEvent,
    EditedMessage,
    EditedMessagePart,
    EditStatus,
)
from attributed_body.body import (
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
    apply_retractions,
    parse_body,
    parse_body_legacy,
    reconstruct,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "AttributedBodyException",
    "ConfigurationException",
    "IllegalStateException",
    "InvalidBackReferenceException",
    "InvalidHeaderException",
    "OutOfBoundsException",
    "PlistParseException",
    "StreamTypedException",
    "TypedStreamException",
    # Configuration
    "AttributedBodyConfig",
    "BodyConfig",
    "DecoderConfig",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_logging",
    "get_logger",
    "set_level",
    # Typedstream
    "TypedStreamReader",
    "decode",
    # Edit history
    "EditedEvent",
    "EditedMessage",
    "EditedMessagePart",
    "EditStatus",
    # Body components
    "BubbleComponent",
    "Text",
    "TextAttributes",
    "Attachment",
    "App",
    "Retracted",
    # Text effects
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
    # Body parsing
    "parse_body",
    "parse_body_legacy",
    "reconstruct",
    "apply_retractions",
]
