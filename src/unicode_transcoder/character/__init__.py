"""Character layer: scalar validation, codecs, sinks and encoded views."""

from .codecs import (
    Codec,
    Encoding,
    UTF8Codec,
    UTF16Codec,
    UTF32Codec,
    get_codec,
)
from .scalar import is_surrogate, is_valid_scalar
from .sinks import (
    BoundedSink,
    CallbackSink,
    Sink,
    UnitCallback,
    unit_array,
)
from .view import EncodedView

__all__ = [
    # Modules
    "codecs",
    "scalar",
    "sinks",
    "view",
    # Scalar values
    "is_valid_scalar",
    "is_surrogate",
    # Codecs
    "Codec",
    "Encoding",
    "UTF8Codec",
    "UTF16Codec",
    "UTF32Codec",
    "get_codec",
    # Sinks
    "Sink",
    "BoundedSink",
    "CallbackSink",
    "UnitCallback",
    "unit_array",
    # Views
    "EncodedView",
]
