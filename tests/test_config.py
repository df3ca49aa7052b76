"""Unit tests for attributed_body.config module."""

import pytest

from attributed_body.config import AttributedBodyConfig, BodyConfig, DecoderConfig
from attributed_body.exceptions import ConfigurationException


class TestDecoderConfig:
    """Tests for DecoderConfig."""

    def test_defaults(self):
        config = DecoderConfig()
        assert config.max_depth == 64
        assert config.strict_reservations is False

    @pytest.mark.parametrize("value", [0, -1, 2.5, "8", True])
    def test_invalid_max_depth(self, value):
        with pytest.raises(ConfigurationException):
            DecoderConfig(max_depth=value)

    def test_setter_validates(self):
        config = DecoderConfig()
        config.max_depth = 8
        assert config.max_depth == 8
        with pytest.raises(ConfigurationException):
            config.max_depth = 0

    def test_from_dict(self):
        config = DecoderConfig.from_dict({"max_depth": 16, "strict_reservations": True})
        assert config.max_depth == 16
        assert config.strict_reservations is True


class TestBodyConfig:
    """Tests for BodyConfig."""

    def test_defaults(self):
        config = BodyConfig()
        assert config.legacy_fallback is True
        assert config.split_message_parts is True

    def test_from_dict(self):
        config = BodyConfig.from_dict({"split_message_parts": False})
        assert config.legacy_fallback is True
        assert config.split_message_parts is False


class TestAttributedBodyConfig:
    """Tests for AttributedBodyConfig loading."""

    def test_defaults(self, default_config):
        assert default_config.decoder.max_depth == 64
        assert default_config.body.legacy_fallback is True

    def test_from_dict(self):
        config = AttributedBodyConfig.from_dict({
            "decoder": {"max_depth": 10},
            "body": {"legacy_fallback": False},
        })
        assert config.decoder.max_depth == 10
        assert config.body.legacy_fallback is False

    def test_from_dict_not_a_mapping(self):
        with pytest.raises(ConfigurationException):
            AttributedBodyConfig.from_dict(["decoder"])

    @pytest.mark.parametrize(
        "content",
        [
            "attributed_body:\n  decoder: [1, 2]\n",
            "body: enabled\n",
            "- decoder\n",
        ],
    )
    def test_sections_must_be_mappings(self, content):
        with pytest.raises(ConfigurationException):
            AttributedBodyConfig.from_yaml_string(content)

    def test_from_yaml_string(self):
        config = AttributedBodyConfig.from_yaml_string(
            "attributed_body:\n"
            "  decoder:\n"
            "    max_depth: 32\n"
            "    strict_reservations: true\n"
            "  body:\n"
            "    split_message_parts: false\n"
        )
        assert config.decoder.max_depth == 32
        assert config.decoder.strict_reservations is True
        assert config.body.split_message_parts is False

    def test_from_yaml_string_without_root_key(self):
        config = AttributedBodyConfig.from_yaml_string("decoder:\n  max_depth: 5\n")
        assert config.decoder.max_depth == 5

    def test_from_empty_yaml_string(self):
        config = AttributedBodyConfig.from_yaml_string("")
        assert config.decoder.max_depth == 64

    def test_from_invalid_yaml_string(self):
        with pytest.raises(ConfigurationException):
            AttributedBodyConfig.from_yaml_string("decoder: [unclosed")

    def test_invalid_value_in_yaml(self):
        with pytest.raises(ConfigurationException):
            AttributedBodyConfig.from_yaml_string("decoder:\n  max_depth: 0\n")

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "attributed-body.yml"
        path.write_text("attributed_body:\n  body:\n    legacy_fallback: false\n")
        config = AttributedBodyConfig.from_yaml(str(path))
        assert config.body.legacy_fallback is False

    def test_from_missing_yaml_file(self, tmp_path):
        with pytest.raises(ConfigurationException):
            AttributedBodyConfig.from_yaml(str(tmp_path / "missing.yml"))
