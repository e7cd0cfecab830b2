"""Configuration classes for Unicode transcoding.

Configuration objects are frozen dataclasses validated on construction, so a
single instance can be shared by every view in a process.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class Utf8RuleSet(Enum):
    """Which overlong and out-of-range rules UTF-8 validation applies."""

    STRICT = auto()   # Reject every overlong form and every lead beyond U+10FFFF
    LEGACY = auto()   # Reject all E0-led 3-byte forms, no 4-byte range rule


class UnencodablePolicy(Enum):
    """What target-length counting does with a scalar the target cannot hold."""

    RAISE = auto()        # Raise UnencodableScalarError
    COUNT_ZERO = auto()   # Contribute zero units and keep going


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for codec selection."""

    utf8_rules: Utf8RuleSet = Utf8RuleSet.STRICT

    def __post_init__(self) -> None:
        """Validate codec configuration."""
        if not isinstance(self.utf8_rules, Utf8RuleSet):
            raise ValueError("utf8_rules must be a Utf8RuleSet")


@dataclass(frozen=True)
class ViewConfig:
    """Configuration for encoded view walks."""

    unencodable_policy: UnencodablePolicy = UnencodablePolicy.RAISE
    enable_diagnostics: bool = True  # log validation failures at DEBUG

    def __post_init__(self) -> None:
        """Validate view configuration."""
        if not isinstance(self.unencodable_policy, UnencodablePolicy):
            raise ValueError("unencodable_policy must be an UnencodablePolicy")
        if not isinstance(self.enable_diagnostics, bool):
            raise ValueError("enable_diagnostics must be a bool")


_COMPONENTS = ("codec", "view")


@dataclass(frozen=True)
class TranscoderConfig:
    """Top-level configuration shared by codecs, views and the convenience API.

    Immutable, and therefore safe to share between threads.
    """

    codec: CodecConfig = field(default_factory=CodecConfig)
    view: ViewConfig = field(default_factory=ViewConfig)

    correlation_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the component types."""
        if not isinstance(self.codec, CodecConfig):
            raise ConfigValidationError(
                "codec must be a CodecConfig", field_name="codec"
            )
        if not isinstance(self.view, ViewConfig):
            raise ConfigValidationError(
                "view must be a ViewConfig", field_name="view"
            )
        if self.correlation_id is not None and not self.correlation_id:
            raise ConfigValidationError(
                "correlation_id must be non-empty or None",
                field_name="correlation_id",
                suggestions=["Pass None to disable correlation tracking"],
            )

    def override(self, **kwargs: Any) -> "TranscoderConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New TranscoderConfig instance with overrides applied

        Example:
            >>> config = TranscoderConfig()
            >>> legacy = config.override(codec__utf8_rules=Utf8RuleSet.LEGACY)
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {list(_COMPONENTS)}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for key, value in nested_overrides.items():
                if key in _COMPONENTS and isinstance(value, dict):
                    new_fields[key] = replace(getattr(self, key), **value)
                else:
                    new_fields[key] = value
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format, enums by name."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscoderConfig":
        """Create configuration from a dictionary produced by ``to_dict``.

        Raises:
            ConfigValidationError: on unknown enum names or invalid values
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            field_values: Dict[str, Any] = {}
            for field_name, field_info in target_class.__dataclass_fields__.items():
                if field_name not in data_dict:
                    continue
                value = data_dict[field_name]
                field_type = field_info.type

                if hasattr(field_type, "__dataclass_fields__"):
                    field_values[field_name] = _dict_to_dataclass(value, field_type)
                elif hasattr(field_type, "__members__") and isinstance(value, str):
                    field_values[field_name] = field_type[value]
                else:
                    field_values[field_name] = value

            return target_class(**field_values)

        try:
            return _dict_to_dataclass(data, cls)
        except KeyError as e:
            raise ConfigValidationError(f"Unknown option value: {e}") from e
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "TranscoderConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def strict(cls) -> "TranscoderConfig":
        """Textbook UTF-8 rules and loud failure on unencodable scalars."""
        return cls()

    @classmethod
    def legacy(cls) -> "TranscoderConfig":
        """Reproduce the narrower historical UTF-8 rejection rules."""
        return cls(codec=CodecConfig(utf8_rules=Utf8RuleSet.LEGACY))

    @classmethod
    def lenient_counting(cls) -> "TranscoderConfig":
        """Count unencodable scalars as zero units instead of raising."""
        return cls(view=ViewConfig(unencodable_policy=UnencodablePolicy.COUNT_ZERO))
