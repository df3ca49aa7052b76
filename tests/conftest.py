"""Shared pytest fixtures for attributed-body tests."""

import logging

import pytest

from attributed_body.config import AttributedBodyConfig, BodyConfig, DecoderConfig
from attributed_body.logging import ATTRIBUTED_BODY_ROOT_LOGGER
from attributed_body.typedstream import decode

from tests import blobs


@pytest.fixture
def default_config():
    """Create a default AttributedBodyConfig."""
    return AttributedBodyConfig()


@pytest.fixture
def strict_decoder_config():
    """Create a DecoderConfig that rejects unfilled object slots."""
    return DecoderConfig(strict_reservations=True)


@pytest.fixture
def unsplit_body_config():
    """Create a BodyConfig that keeps all message parts in one text run."""
    return BodyConfig(split_message_parts=False)


@pytest.fixture
def mention_records():
    """Records of the "Test Dad " archive."""
    return decode(blobs.MENTION)


@pytest.fixture
def attachment_records():
    """Records of the attachment followed by "Hello" archive."""
    return decode(blobs.ATTACHMENT)


@pytest.fixture
def reset_logging():
    """Restore the package root logger after a test changes it."""
    logger = logging.getLogger(ATTRIBUTED_BODY_ROOT_LOGGER)
    level = logger.level
    handlers = list(logger.handlers)
    disabled = logger.disabled
    yield logger
    logger.setLevel(level)
    logger.handlers = handlers
    logger.disabled = disabled
