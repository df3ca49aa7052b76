"""Unit tests for attributed_body.body.legacy module."""

import pytest

from attributed_body.body.legacy import parse_body_legacy
from attributed_body.body.models import App, Attachment, Default, Text, TextAttributes


def text(start, end):
    return Text([TextAttributes(start, end, Default())])


class TestParseBodyLegacy:
    """Tests for splitting plain text at placeholder characters."""

    def test_attachment_then_text(self):
        assert parse_body_legacy("\ufffcHello") == [Attachment(""), text(1, 6)]

    def test_mixed_placeholders(self):
        body = "One\ufffd\ufffcTwo\ufffcThree\ufffcfour"
        components = parse_body_legacy(body)
        assert components == [
            text(0, 3),
            App(),
            Attachment(),
            text(5, 8),
            Attachment(),
            text(9, 14),
            Attachment(),
            text(15, 19),
        ]
        texts = [c.attributes[0].slice(body) for c in components if isinstance(c, Text)]
        assert texts == ["One", "Two", "Three", "four"]

    def test_single_character_between_markers(self):
        assert parse_body_legacy("a\ufffcb") == [text(0, 1), Attachment(), text(2, 3)]

    def test_emoji_only(self):
        assert parse_body_legacy("\U0001f648") == [text(0, 1)]

    def test_marker_only(self):
        assert parse_body_legacy("\ufffc") == [Attachment()]

    @pytest.mark.parametrize("body", [None, ""])
    def test_no_text(self, body):
        assert parse_body_legacy(body) == []
