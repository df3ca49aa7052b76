"""Unit tests for attributed_body.body.parser module."""

import logging
import struct

import pytest

from attributed_body.body.models import (
    Attachment,
    Default,
    Mention,
    Retracted,
    Text,
    TextAttributes,
)
from attributed_body.body.parser import parse_body
from attributed_body.config import AttributedBodyConfig, BodyConfig
from attributed_body.edited import EditedMessage, EditedMessagePart, EditStatus
from attributed_body.exceptions import InvalidHeaderException

from tests import blobs


MENTION_BODY = [
    Text([
        TextAttributes(0, 5, Default()),
        TextAttributes(5, 8, Mention(blobs.MENTION_HANDLE)),
        TextAttributes(8, 9, Default()),
    ])
]


class TestParseBody:
    """Tests for the decode, reconstruct, fall back and overlay sequence."""

    def test_decoded_body(self):
        assert parse_body("Test Dad ", blobs.MENTION) == MENTION_BODY

    def test_text_read_from_archive(self):
        assert parse_body(None, blobs.MENTION) == MENTION_BODY

    def test_no_archive(self):
        assert parse_body("\ufffcHello") == [
            Attachment(""),
            Text([TextAttributes(1, 6, Default())]),
        ]

    def test_undecodable_archive_falls_back(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="attributed_body"):
            result = parse_body("\ufffcHello", b"\x05garbage")
        assert result == [Attachment(""), Text([TextAttributes(1, 6, Default())])]
        assert "using plain text" in caplog.text

    def test_archive_without_runs_falls_back(self):
        assert parse_body("Hello", blobs.nsstring_archive("Hello")) == [
            Text([TextAttributes(0, 5, Default())])
        ]

    @pytest.mark.parametrize(
        "key", [blobs.PART_KEY, "__kIMTextEffectAttributeName"]
    )
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_number_in_archive(self, key, value):
        number = blobs.first_double(struct.pack("<d", value))
        blob = blobs.single_number_archive("hi", key, number)
        assert parse_body("hi", blob) == [Text([TextAttributes(0, 2, Default())])]

    def test_fallback_disabled(self):
        config = AttributedBodyConfig(body=BodyConfig(legacy_fallback=False))
        with pytest.raises(InvalidHeaderException):
            parse_body("Hello", b"\x05garbage", config=config)

    def test_fallback_disabled_without_runs(self):
        config = AttributedBodyConfig(body=BodyConfig(legacy_fallback=False))
        assert parse_body("Hello", blobs.nsstring_archive("Hello"), config=config) == []

    def test_unsent_part_is_marked(self):
        edited = EditedMessage([
            EditedMessagePart(EditStatus.ORIGINAL),
            EditedMessagePart(EditStatus.UNSENT),
        ])
        result = parse_body("\ufffcHello", blobs.ATTACHMENT, edited)
        assert result == [
            Attachment(blobs.ATTACHMENT_GUID),
            Retracted(),
            Text([TextAttributes(1, 6, Default())]),
        ]
