"""Unicode transcoder.

Validation, counting and conversion of in-memory UTF-8, UTF-16 and UTF-32
code units, with output written through caller-supplied sinks.

Progressive API Disclosure:
- Level 1: Simple functions - validate(), count_codepoints(), transcode()
- Level 2: Views - EncodedView over a caller-owned buffer
- Level 3: Codecs - per-encoding read/write/validate/encode/decode primitives
"""

__version__ = "0.1.0"
__author__ = "Unicode Transcoder Team"

# Progressive API disclosure - Level 1: Simple functions
from .api import count_codepoints, transcode, validate

# Progressive API disclosure - Level 2 and 3: Views and codecs
from .character import (
    BoundedSink,
    CallbackSink,
    EncodedView,
    Encoding,
    Sink,
    UTF8Codec,
    UTF16Codec,
    UTF32Codec,
    get_codec,
    is_valid_scalar,
    unit_array,
)

# Configuration, results and errors
from .shared import (
    InvalidEncodingError,
    PreconditionViolation,
    TranscodeError,
    TranscoderConfig,
    UnencodablePolicy,
    UnencodableScalarError,
    Utf8RuleSet,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "validate",
    "count_codepoints",
    "transcode",

    # Level 2: Views and sinks
    "EncodedView",
    "Sink",
    "BoundedSink",
    "CallbackSink",
    "unit_array",

    # Level 3: Codecs and scalar validation
    "Encoding",
    "UTF8Codec",
    "UTF16Codec",
    "UTF32Codec",
    "get_codec",
    "is_valid_scalar",

    # Configuration, results and errors
    "TranscoderConfig",
    "Utf8RuleSet",
    "UnencodablePolicy",
    "ValidationIssue",
    "ValidationResult",
    "TranscodeError",
    "PreconditionViolation",
    "InvalidEncodingError",
    "UnencodableScalarError",
]
