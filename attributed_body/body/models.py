"""Body components and the text effects applied to their ranges."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


ATTACHMENT_CHAR = "\ufffc"
APP_CHAR = "\ufffd"
REPLACEMENT_CHARS = (ATTACHMENT_CHAR, APP_CHAR)


class Unit(Enum):
    """Unit a convertible text range is expressed in."""
    CURRENCY = "CURRENCY"
    DISTANCE = "DISTANCE"
    TEMPERATURE = "TEMPERATURE"
    TIMEZONE = "TIMEZONE"
    VOLUME = "VOLUME"
    WEIGHT = "WEIGHT"


class Style(Enum):
    """Traditional text style."""
    BOLD = "BOLD"
    ITALIC = "ITALIC"
    STRIKETHROUGH = "STRIKETHROUGH"
    UNDERLINE = "UNDERLINE"


class Animation(Enum):
    """Animation applied to a text range."""
    BIG = 5
    SMALL = 11
    SHAKE = 9
    NOD = 8
    EXPLODE = 12
    RIPPLE = 4
    BLOOM = 6
    JITTER = 10
    UNKNOWN = -1

    @classmethod
    def from_id(cls, value: int) -> "Animation":
        for animation in cls:
            if animation.value == value and animation is not cls.UNKNOWN:
                return animation
        return cls.UNKNOWN


class TextEffect:
    """Base class of the effects a text range can carry."""


@dataclass(frozen=True)
class Default(TextEffect):
    """Unstyled text."""


@dataclass(frozen=True)
class Mention(TextEffect):
    """A mentioned contact, identified by phone number or email."""

    handle: str


@dataclass(frozen=True)
class Link(TextEffect):
    """A clickable link such as ``https:``, ``tel:`` or ``mailto:``."""

    url: str


@dataclass(frozen=True)
class OneTimeCode(TextEffect):
    """A one-time code, e.g. from a 2FA message."""


@dataclass(frozen=True)
class Styles(TextEffect):
    styles: Tuple[Style, ...]


@dataclass(frozen=True)
class Animated(TextEffect):
    """Text drawn with a send animation.

    ``effect_id`` is the archived id, kept for animations this package
    does not name.
    """

    animation: Animation
    effect_id: Optional[int] = None


@dataclass(frozen=True)
class Conversion(TextEffect):
    unit: Unit


@dataclass(frozen=True)
class TextAttributes:
    """An effect applied to the characters in ``[start, end)`` of the text."""

    start: int
    end: int
    effect: TextEffect

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


class BubbleComponent:
    """Base class of the parts a message body renders as."""


@dataclass
class Text(BubbleComponent):
    """A run of text made of one or more attributed ranges."""

    attributes: List[TextAttributes] = field(default_factory=list)


@dataclass
class Attachment(BubbleComponent):
    """An attachment placed inline in the message.

    ``guid`` is empty when the position is known only from the placeholder
    character in the text.
    """

    guid: str = ""
    name: Optional[str] = None
    height: Optional[float] = None
    width: Optional[float] = None
    transcription: Optional[str] = None


@dataclass
class App(BubbleComponent):
    """An app integration, e.g. Apple Pay or a shared location."""


@dataclass
class Retracted(BubbleComponent):
    """A message part that was unsent after delivery."""
