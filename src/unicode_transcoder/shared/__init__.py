"""Shared utilities for Unicode transcoding.

This module provides configuration objects, result types, exceptions and the
logging wrapper used by every layer.
"""

from .config import (
    CodecConfig,
    ConfigError,
    ConfigValidationError,
    TranscoderConfig,
    UnencodablePolicy,
    Utf8RuleSet,
    ViewConfig,
)
from .errors import (
    InvalidEncodingError,
    PreconditionViolation,
    SinkOverflowError,
    TranscodeError,
    UnencodableScalarError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "CodecConfig",
    "ConfigError",
    "ConfigValidationError",
    "TranscoderConfig",
    "UnencodablePolicy",
    "Utf8RuleSet",
    "ViewConfig",
    "InvalidEncodingError",
    "PreconditionViolation",
    "SinkOverflowError",
    "TranscodeError",
    "UnencodableScalarError",
    "CorrelationLogger",
    "get_logger",
    "ValidationIssue",
    "ValidationResult",
]
