"""attributed-body configuration."""

from typing import Optional
import os

from attributed_body.exceptions import ConfigurationException


CONFIG_ROOT_KEY = "attributed_body"


class DecoderConfig:
    """Limits and checks applied by the typedstream reader."""

    def __init__(
        self,
        max_depth: int = 64,
        strict_reservations: bool = False,
    ):
        self._max_depth = max_depth
        self._strict_reservations = strict_reservations
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self._max_depth, int) or isinstance(self._max_depth, bool):
            raise ConfigurationException("max_depth must be an integer")
        if self._max_depth <= 0:
            raise ConfigurationException("max_depth must be positive")

    @property
    def max_depth(self) -> int:
        """Get the deepest class chain or embedded data nesting accepted."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        self._max_depth = value
        self._validate()

    @property
    def strict_reservations(self) -> bool:
        """Whether unfilled object slots fail the decode."""
        return self._strict_reservations

    @strict_reservations.setter
    def strict_reservations(self, value: bool) -> None:
        self._strict_reservations = value

    @classmethod
    def from_dict(cls, data: dict) -> "DecoderConfig":
        """Create DecoderConfig from a dictionary."""
        return cls(
            max_depth=data.get("max_depth", 64),
            strict_reservations=data.get("strict_reservations", False),
        )


class BodyConfig:
    """Options for turning decoded records into body components."""

    def __init__(
        self,
        legacy_fallback: bool = True,
        split_message_parts: bool = True,
    ):
        self._legacy_fallback = legacy_fallback
        self._split_message_parts = split_message_parts

    @property
    def legacy_fallback(self) -> bool:
        """Whether undecodable blobs fall back to marker splitting of the text."""
        return self._legacy_fallback

    @legacy_fallback.setter
    def legacy_fallback(self, value: bool) -> None:
        self._legacy_fallback = value

    @property
    def split_message_parts(self) -> bool:
        """Whether a new message part starts a new text component."""
        return self._split_message_parts

    @split_message_parts.setter
    def split_message_parts(self, value: bool) -> None:
        self._split_message_parts = value

    @classmethod
    def from_dict(cls, data: dict) -> "BodyConfig":
        """Create BodyConfig from a dictionary."""
        return cls(
            legacy_fallback=data.get("legacy_fallback", True),
            split_message_parts=data.get("split_message_parts", True),
        )


class AttributedBodyConfig:
    """Top-level configuration.

    Example:
        Loading configuration from YAML::

            config = AttributedBodyConfig.from_yaml("attributed-body.yml")

        where the file contains::

            attributed_body:
              decoder:
                max_depth: 32
              body:
                split_message_parts: false
    """

    def __init__(
        self,
        decoder: Optional[DecoderConfig] = None,
        body: Optional[BodyConfig] = None,
    ):
        self._decoder = decoder or DecoderConfig()
        self._body = body or BodyConfig()

    @property
    def decoder(self) -> DecoderConfig:
        """Get the decoder configuration."""
        return self._decoder

    @decoder.setter
    def decoder(self, value: DecoderConfig) -> None:
        self._decoder = value

    @property
    def body(self) -> BodyConfig:
        """Get the body reconstruction configuration."""
        return self._body

    @body.setter
    def body(self, value: BodyConfig) -> None:
        self._body = value

    @classmethod
    def from_dict(cls, data: dict) -> "AttributedBodyConfig":
        """Create AttributedBodyConfig from a dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationException("Configuration must be a mapping")
        sections = {}
        for name in ("decoder", "body"):
            section = data.get(name) or {}
            if not isinstance(section, dict):
                raise ConfigurationException(f"'{name}' must be a mapping")
            sections[name] = section
        return cls(
            decoder=DecoderConfig.from_dict(sections["decoder"]),
            body=BodyConfig.from_dict(sections["body"]),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "AttributedBodyConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            AttributedBodyConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        try:
            import yaml
        except ImportError:
            raise ConfigurationException(
                "PyYAML is required for YAML configuration loading. "
                "Install it with: pip install pyyaml"
            )

        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)
        except IOError as e:
            raise ConfigurationException(
                f"Failed to read configuration file: {e}", cause=e
            )

        return cls._from_loaded(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "AttributedBodyConfig":
        """Load configuration from a YAML string.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        try:
            import yaml
        except ImportError:
            raise ConfigurationException(
                "PyYAML is required for YAML configuration loading. "
                "Install it with: pip install pyyaml"
            )

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)

        return cls._from_loaded(data)

    @classmethod
    def _from_loaded(cls, data) -> "AttributedBodyConfig":
        if data is None:
            data = {}
        if isinstance(data, dict) and CONFIG_ROOT_KEY in data:
            data = data[CONFIG_ROOT_KEY] or {}
        return cls.from_dict(data)
