"""Exception hierarchy for Unicode transcoding.

Malformed input is never reported through these exceptions by the core
walkers; ``validate()`` answers with a boolean. Exceptions are reserved for
programming errors (``PreconditionViolation``), for policy decisions the
caller opted into (``UnencodableScalarError``) and for the convenience API,
which turns a failed validation into ``InvalidEncodingError``.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .result import ValidationResult


class TranscodeError(Exception):
    """Base exception for all transcoding errors."""


class PreconditionViolation(TranscodeError, AssertionError):
    """A codec was asked to do something its contract forbids.

    Raised when encoding a scalar the target encoding cannot represent. This
    signals a bug in the caller, which must validate scalars before encoding
    them, and is deliberately not a ``ValueError``.
    """


class InvalidEncodingError(TranscodeError, ValueError):
    """Input code units are not well-formed in the claimed encoding."""

    def __init__(self, message: str, result: Optional["ValidationResult"] = None):
        super().__init__(message)
        self.result = result


class UnencodableScalarError(TranscodeError, ValueError):
    """A source scalar has no representation in the requested target encoding."""

    def __init__(self, scalar: int, encoding: str):
        super().__init__(f"U+{scalar:04X} cannot be encoded in {encoding}")
        self.scalar = scalar
        self.encoding = encoding


class SinkOverflowError(TranscodeError):
    """A bounded output sink ran out of capacity."""

    def __init__(self, capacity: int):
        super().__init__(f"Sink capacity of {capacity} code units exceeded")
        self.capacity = capacity
