"""Tests for the configuration system."""

import json
from dataclasses import FrozenInstanceError

import pytest

from unicode_transcoder.shared.config import (
    CodecConfig,
    ConfigError,
    ConfigValidationError,
    TranscoderConfig,
    UnencodablePolicy,
    Utf8RuleSet,
    ViewConfig,
)


class TestComponentConfigs:
    """Tests for codec and view configuration."""

    def test_defaults(self):
        """Test default component values."""
        assert CodecConfig().utf8_rules is Utf8RuleSet.STRICT
        view = ViewConfig()
        assert view.unencodable_policy is UnencodablePolicy.RAISE
        assert view.enable_diagnostics is True

    def test_codec_config_validation(self):
        """Test that rule sets must be enum members."""
        with pytest.raises(ValueError, match="utf8_rules must be a Utf8RuleSet"):
            CodecConfig(utf8_rules="STRICT")

    def test_view_config_validation(self):
        """Test that view options are type-checked."""
        with pytest.raises(ValueError, match="unencodable_policy"):
            ViewConfig(unencodable_policy="RAISE")
        with pytest.raises(ValueError, match="enable_diagnostics"):
            ViewConfig(enable_diagnostics=1)


class TestTranscoderConfig:
    """Tests for the top-level configuration."""

    def test_default_configuration(self):
        """Test defaults and immutability."""
        config = TranscoderConfig()

        assert config.codec == CodecConfig()
        assert config.view == ViewConfig()
        assert config.correlation_id is None
        with pytest.raises(FrozenInstanceError):
            config.name = "changed"

    def test_component_type_validation(self):
        """Test that components must be the right dataclasses."""
        with pytest.raises(ConfigValidationError) as excinfo:
            TranscoderConfig(codec=ViewConfig())
        assert excinfo.value.field_name == "codec"
        assert isinstance(excinfo.value, ConfigError)

    def test_empty_correlation_id_rejected(self):
        """Test that an empty correlation ID is refused with a suggestion."""
        with pytest.raises(ConfigValidationError) as excinfo:
            TranscoderConfig(correlation_id="")
        assert excinfo.value.suggestions

    def test_presets(self):
        """Test the preset factory methods."""
        assert TranscoderConfig.strict() == TranscoderConfig()
        assert TranscoderConfig.legacy().codec.utf8_rules is Utf8RuleSet.LEGACY
        assert (
            TranscoderConfig.lenient_counting().view.unencodable_policy
            is UnencodablePolicy.COUNT_ZERO
        )


class TestOverride:
    """Tests for creating modified copies."""

    def test_nested_override(self):
        """Test component__field notation."""
        base = TranscoderConfig()
        config = base.override(
            codec__utf8_rules=Utf8RuleSet.LEGACY,
            view__enable_diagnostics=False,
            correlation_id="job-7",
        )

        assert config.codec.utf8_rules is Utf8RuleSet.LEGACY
        assert config.view.enable_diagnostics is False
        assert config.view.unencodable_policy is UnencodablePolicy.RAISE
        assert config.correlation_id == "job-7"
        assert base.codec.utf8_rules is Utf8RuleSet.STRICT

    def test_unknown_component(self):
        """Test that unknown components are reported."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration component"):
            TranscoderConfig().override(tree__depth=3)

    def test_invalid_value(self):
        """Test that invalid overrides are wrapped in ConfigValidationError."""
        with pytest.raises(ConfigValidationError):
            TranscoderConfig().override(codec__utf8_rules="LEGACY")

    def test_unknown_field(self):
        """Test that unknown top-level fields are rejected."""
        with pytest.raises(ConfigValidationError):
            TranscoderConfig().override(buffer_size=10)


class TestSerialization:
    """Tests for dict and JSON conversion."""

    def test_to_dict(self):
        """Test that enums serialize by name."""
        assert TranscoderConfig.legacy().to_dict() == {
            "codec": {"utf8_rules": "LEGACY"},
            "view": {"unencodable_policy": "RAISE", "enable_diagnostics": True},
            "correlation_id": None,
            "name": None,
        }

    def test_dict_round_trip(self):
        """Test from_dict(to_dict(config)) == config."""
        config = TranscoderConfig(
            codec=CodecConfig(Utf8RuleSet.LEGACY),
            view=ViewConfig(UnencodablePolicy.COUNT_ZERO, enable_diagnostics=False),
            correlation_id="abc",
            name="ingest",
        )
        assert TranscoderConfig.from_dict(config.to_dict()) == config

    def test_json_round_trip(self):
        """Test JSON serialization."""
        config = TranscoderConfig.lenient_counting()
        text = config.to_json()

        assert json.loads(text)["view"]["unencodable_policy"] == "COUNT_ZERO"
        assert TranscoderConfig.from_json(text) == config

    def test_partial_dict_uses_defaults(self):
        """Test that missing keys fall back to defaults."""
        config = TranscoderConfig.from_dict({"codec": {"utf8_rules": "LEGACY"}})
        assert config.codec.utf8_rules is Utf8RuleSet.LEGACY
        assert config.view == ViewConfig()

    def test_unknown_enum_name(self):
        """Test that unknown enum names raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError, match="Unknown option value"):
            TranscoderConfig.from_dict({"codec": {"utf8_rules": "LOOSE"}})
