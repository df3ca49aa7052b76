"""Logging infrastructure for attributed-body.

Every component logs through a child of the ``attributed_body`` logger,
so one call controls the whole package. Nothing reaches a handler until
:func:`configure_logging` is called.

Example:
    >>> from attributed_body.logging import configure_logging, set_level
    >>> configure_logging(level="DEBUG")
    >>> set_level("WARNING", "edited")
"""

import logging
from typing import Optional, Union


ATTRIBUTED_BODY_ROOT_LOGGER = "attributed_body"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

Level = Union[int, str]


class AttributedBodyLoggerFactory:
    """Creates component loggers below the ``attributed_body`` namespace.

    Components in use are ``body`` (fallback decisions of
    :func:`~attributed_body.body.parse_body`) and ``edited`` (revisions
    whose text could not be recovered).
    """

    @classmethod
    def get_logger(cls, name: str = "") -> logging.Logger:
        """Get the logger of a component, or the package root logger."""
        if not name:
            return logging.getLogger(ATTRIBUTED_BODY_ROOT_LOGGER)
        return logging.getLogger(f"{ATTRIBUTED_BODY_ROOT_LOGGER}.{name}")

    @classmethod
    def configure(
        cls,
        level: Level = logging.INFO,
        format_string: str = DEFAULT_FORMAT,
        handler: Optional[logging.Handler] = None,
    ) -> logging.Logger:
        """Attach a handler to the package root logger.

        Args:
            level: Level as a number or a name such as ``"DEBUG"``.
            format_string: Format of emitted records.
            handler: Handler to attach. A ``StreamHandler`` when None.
                Ignored if the root logger already has a handler.

        Returns:
            The package root logger.
        """
        logger = cls.get_logger()
        logger.setLevel(_to_level(level))

        if not logger.handlers:
            handler = handler or logging.StreamHandler()
            handler.setFormatter(logging.Formatter(format_string))
            logger.addHandler(handler)
        return logger

    @classmethod
    def set_level(cls, level: Level, component: str = "") -> None:
        cls.get_logger(component).setLevel(_to_level(level))

    @classmethod
    def disable(cls) -> None:
        """Silence the whole package."""
        cls.get_logger().disabled = True

    @classmethod
    def enable(cls) -> None:
        cls.get_logger().disabled = False


def _to_level(level: Level) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown logging level: {level}")
        return value
    return level


def get_logger(name: str = "") -> logging.Logger:
    """Get an attributed-body logger for a component.

    Args:
        name: Component name (e.g., 'body', 'edited').
    """
    return AttributedBodyLoggerFactory.get_logger(name)


def configure_logging(
    level: Level = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Configure the attributed-body logging system.

    See :meth:`AttributedBodyLoggerFactory.configure`.
    """
    return AttributedBodyLoggerFactory.configure(level, format_string, handler)


def set_level(level: Level, component: str = "") -> None:
    """Set the level of a component, or of the root logger."""
    AttributedBodyLoggerFactory.set_level(level, component)


def disable_logging() -> None:
    """Silence every attributed-body logger."""
    AttributedBodyLoggerFactory.disable()


def enable_logging() -> None:
    AttributedBodyLoggerFactory.enable()
