"""Encoding-agnostic validation, counting and transcoding over borrowed spans.

An ``EncodedView`` pairs a caller-owned sequence of code units with an
``Encoding`` tag and a ``[first, last)`` window. It never copies the units and
keeps no decoded state: every query walks the window again using the codec
selected by the tag.

Only ``validate`` and ``validate_detailed`` are safe on untrusted input. The
counting and transcoding operations assume the window has been validated and
give unspecified results otherwise.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Sequence, Union

from ..shared.config import TranscoderConfig, UnencodablePolicy
from ..shared.errors import UnencodableScalarError
from ..shared.logging import CorrelationLogger, get_logger
from ..shared.result import ValidationIssue, ValidationResult
from .codecs import Codec, Encoding, get_codec
from .scalar import is_valid_scalar
from .sinks import Sink

EncodingLike = Union[Encoding, str]


@dataclass(frozen=True, eq=False)
class EncodedView:
    """Read-only window over code units of one encoding.

    Attributes:
        units: Caller-owned code units; must outlive the view
        encoding: Encoding of ``units``
        first: Start index of the window
        last: End index of the window (exclusive), defaults to ``len(units)``
        config: Codec rules, unencodable policy and logging correlation
    """

    units: Sequence[int]
    encoding: EncodingLike
    first: int = 0
    last: Optional[int] = None
    config: TranscoderConfig = field(default_factory=TranscoderConfig)

    codec: Codec = field(init=False, repr=False)
    _logger: CorrelationLogger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Resolve the codec and check the window bounds."""
        encoding = Encoding.coerce(self.encoding)
        last = len(self.units) if self.last is None else self.last
        if not 0 <= self.first <= last <= len(self.units):
            raise ValueError(
                f"Invalid window [{self.first}, {last}) over {len(self.units)} units"
            )
        object.__setattr__(self, "encoding", encoding)
        object.__setattr__(self, "last", last)
        object.__setattr__(
            self, "codec", get_codec(encoding, self.config.codec.utf8_rules)
        )
        object.__setattr__(
            self,
            "_logger",
            get_logger(__name__, self.config.correlation_id, "view"),
        )

    def _target_codec(self, target: EncodingLike) -> Codec:
        return get_codec(target, self.config.codec.utf8_rules)

    # Validation

    def validate(self) -> bool:
        """Return True iff the whole window decodes to legal scalar values."""
        return self.validate_detailed().is_valid

    def validate_detailed(self) -> ValidationResult:
        """Walk the window and report the first malformed subsequence, if any."""
        codec = self.codec
        units = self.units
        last = self.last
        pos = self.first
        count = 0

        while pos != last:
            length = codec.read_length(units[pos])
            # Buffer-overrun guard: never inspect past the window
            if last - pos < length:
                return self._reject(ValidationIssue.TRUNCATED, pos, length, count)
            for i in range(pos, pos + length):
                if not 0 <= units[i] <= codec.max_unit:
                    return self._reject(
                        ValidationIssue.UNIT_OUT_OF_RANGE, pos, length, count
                    )
            if not codec.validate_unit_sequence(units, length, pos):
                return self._reject(
                    ValidationIssue.MALFORMED_SEQUENCE, pos, length, count
                )
            if not is_valid_scalar(codec.decode(units, pos)):
                return self._reject(ValidationIssue.INVALID_SCALAR, pos, length, count)
            pos += length
            count += 1

        return ValidationResult(is_valid=True, codepoints=count)

    def _reject(
        self, issue: ValidationIssue, pos: int, length: int, count: int
    ) -> ValidationResult:
        result = ValidationResult(
            is_valid=False,
            codepoints=count,
            issue=issue,
            offset=pos - self.first,
            length=length,
        )
        if self.config.view.enable_diagnostics:
            self._logger.debug(
                "Validation failed",
                extra={
                    "encoding": self.encoding.value,
                    "issue": issue.value,
                    "offset": result.offset,
                    "sequence_length": length,
                },
            )
        return result

    # Traversal

    def scalars(self) -> Iterator[int]:
        """Yield each scalar value in order. The window must be validated."""
        codec = self.codec
        units = self.units
        pos = self.first
        while pos < self.last:
            length = codec.read_length(units[pos])
            yield codec.decode(units, pos)
            pos += length

    def subview(self, start: int, stop: Optional[int] = None) -> "EncodedView":
        """Narrow the window; offsets are relative to this view's start.

        Raises:
            ValueError: if ``[start, stop)`` does not lie inside this view
        """
        size = self.code_unit_count()
        stop = size if stop is None else stop
        if not 0 <= start <= stop <= size:
            raise ValueError(f"Sub-window [{start}, {stop}) outside view of {size} units")
        return replace(self, first=self.first + start, last=self.first + stop)

    # Counting

    def codepoint_count(self) -> int:
        """Count scalars using lead units only. The window must be validated."""
        codec = self.codec
        units = self.units
        pos = self.first
        count = 0
        while pos < self.last:
            pos += codec.read_length(units[pos])
            count += 1
        return count

    def code_unit_count(self) -> int:
        return self.last - self.first  # type: ignore[operator]

    def code_unit_count_in(self, target: EncodingLike) -> int:
        """Units needed to hold this window's scalars in ``target``.

        Raises:
            UnencodableScalarError: when a scalar has no form in ``target``
                and the view's policy is ``UnencodablePolicy.RAISE``
        """
        target_codec = self._target_codec(target)
        strict = self.config.view.unencodable_policy is UnencodablePolicy.RAISE
        total = 0
        for scalar in self.scalars():
            length = target_codec.write_length(scalar)
            if length == 0 and strict:
                raise UnencodableScalarError(scalar, target_codec.name)
            total += length
        return total

    def byte_length(self) -> int:
        return self.code_unit_count() * self.codec.unit_size

    def byte_length_in(self, target: EncodingLike) -> int:
        return self.code_unit_count_in(target) * self._target_codec(target).unit_size

    # Transcoding

    def transcode_to(self, target: EncodingLike, sink: Sink) -> int:
        """Decode each scalar and immediately encode it into ``sink``.

        Args:
            target: Destination encoding
            sink: Receives destination code units in order

        Returns:
            Number of units appended to ``sink``

        Raises:
            PreconditionViolation: if a scalar cannot be encoded in ``target``,
                which only happens when the window was not validated
        """
        target_codec = self._target_codec(target)
        written = 0
        for scalar in self.scalars():
            written += target_codec.encode(scalar, sink)

        if self._logger.is_enabled_for(logging.DEBUG):
            self._logger.debug(
                "Transcoded view",
                extra={
                    "encoding": self.encoding.value,
                    "target_encoding": target_codec.name,
                    "units_read": self.code_unit_count(),
                    "units_written": written,
                },
            )
        return written

    def __len__(self) -> int:
        return self.code_unit_count()
