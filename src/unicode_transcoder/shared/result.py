"""Result objects for validation walks.

A ``ValidationResult`` reports whether a span is well-formed and, when it is
not, where the first bad subsequence starts and why it was rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ValidationIssue(Enum):
    """Reasons a code-unit span can fail validation."""

    TRUNCATED = "truncated"                      # fewer units left than the lead announces
    UNIT_OUT_OF_RANGE = "unit_out_of_range"      # value does not fit the code-unit width
    MALFORMED_SEQUENCE = "malformed_sequence"    # bad lead, trail or overlong form
    INVALID_SCALAR = "invalid_scalar"            # decodes to a surrogate or > U+10FFFF


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an encoded view.

    Attributes:
        is_valid: True iff the whole span decoded to legal scalar values
        codepoints: Scalars decoded before the walk stopped
        issue: Why validation failed, None on success
        offset: Index of the failing subsequence relative to the view start
        length: Number of units the failing subsequence claimed
    """

    is_valid: bool
    codepoints: int = 0
    issue: Optional[ValidationIssue] = None
    offset: Optional[int] = None
    length: int = 0

    def __post_init__(self) -> None:
        """Validate that success and failure fields agree."""
        if self.is_valid and self.issue is not None:
            raise ValueError("A valid result cannot carry an issue")
        if not self.is_valid and (self.issue is None or self.offset is None):
            raise ValueError("An invalid result needs an issue and an offset")
        if self.codepoints < 0:
            raise ValueError("codepoints must be >= 0")

    def __bool__(self) -> bool:
        return self.is_valid

    def describe(self) -> str:
        """Return a short human-readable summary."""
        if self.is_valid:
            return f"valid ({self.codepoints} codepoints)"
        assert self.issue is not None
        return (
            f"{self.issue.value} at unit offset {self.offset} "
            f"(sequence length {self.length})"
        )
