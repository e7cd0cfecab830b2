"""Bit-level codecs for the three Unicode encoding forms.

Each codec implements the same operation set over its own code-unit width:

- ``read_length``: units announced by a lead unit
- ``write_length``: units needed for a scalar (0 means not encodable)
- ``validate_unit_sequence``: structural check of one candidate subsequence
- ``encode``: append a scalar's units to a sink
- ``decode``: read one scalar from an already validated subsequence

Codecs never check scalar legality themselves; that is the job of
``scalar.is_valid_scalar``. They are independent implementations of the
``Codec`` protocol rather than a class hierarchy, and the ``Encoding`` enum
is the tag that selects one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Protocol, Sequence, Union

from ..shared.config import Utf8RuleSet
from ..shared.errors import PreconditionViolation
from .sinks import Sink

# UTF-8 lead byte masks and markers, indexed by sequence length
UTF8_LEAD_MASKS: Dict[int, int] = {1: 0x80, 2: 0xE0, 3: 0xF0, 4: 0xF8}
UTF8_LEAD_MARKERS: Dict[int, int] = {1: 0x00, 2: 0xC0, 3: 0xE0, 4: 0xF0}
UTF8_PAYLOAD_MASKS: Dict[int, int] = {2: 0x1F, 3: 0x0F, 4: 0x07}
UTF8_CONTINUATION_MASK = 0xC0
UTF8_CONTINUATION_MARKER = 0x80
UTF8_CONTINUATION_PAYLOAD = 0x3F

# Overlong and out-of-range boundaries
UTF8_MIN_2BYTE_LEAD = 0xC2
UTF8_3BYTE_OVERLONG_LEAD = 0xE0
UTF8_3BYTE_MIN_SECOND = 0xA0
UTF8_4BYTE_OVERLONG_LEAD = 0xF0
UTF8_4BYTE_MIN_SECOND = 0x90
UTF8_MAX_LEAD = 0xF4
UTF8_MAX_LEAD_MAX_SECOND = 0x8F

# UTF-16 surrogate layout
HIGH_SURROGATE_START = 0xD800
LOW_SURROGATE_START = 0xDC00
SURROGATE_END = 0xE000
SUPPLEMENTARY_BASE = 0x10000
SURROGATE_PAYLOAD = 0x3FF

BMP_LIMIT = 0x10000
SCALAR_LIMIT = 0x110000


class Codec(Protocol):
    """Operation set shared by the UTF-8, UTF-16 and UTF-32 codecs."""

    name: str
    unit_bits: int
    unit_size: int
    max_unit: int
    max_length: int

    def read_length(self, lead: int) -> int: ...

    def write_length(self, scalar: int) -> int: ...

    def validate_unit_sequence(
        self, units: Sequence[int], length: int, start: int = 0
    ) -> bool: ...

    def encode(self, scalar: int, sink: Sink) -> int: ...

    def decode(self, units: Sequence[int], start: int = 0) -> int: ...


def _unencodable(scalar: int, name: str) -> PreconditionViolation:
    return PreconditionViolation(
        f"U+{scalar:04X} is not encodable in {name}; validate scalars before encoding"
    )


@dataclass(frozen=True)
class UTF8Codec:
    """UTF-8 codec over 8-bit code units.

    Attributes:
        rules: Overlong and out-of-range rejection rules applied by
            ``validate_unit_sequence``
    """

    rules: Utf8RuleSet = Utf8RuleSet.STRICT

    name: ClassVar[str] = "utf-8"
    unit_bits: ClassVar[int] = 8
    unit_size: ClassVar[int] = 1
    max_unit: ClassVar[int] = 0xFF
    max_length: ClassVar[int] = 4

    def read_length(self, lead: int) -> int:
        """Classify a lead byte by its high bits.

        Bytes that cannot start a sequence (stray continuation bytes, bytes
        ``>= 0xF8``) report 1 so the caller inspects a single unit, which
        ``validate_unit_sequence`` then rejects.
        """
        for length in (1, 2, 3, 4):
            if (lead & UTF8_LEAD_MASKS[length]) == UTF8_LEAD_MARKERS[length]:
                return length
        return 1

    def write_length(self, scalar: int) -> int:
        if scalar < 0:
            return 0
        if scalar <= 0x7F:
            return 1
        if scalar < 0x800:
            return 2
        if scalar < HIGH_SURROGATE_START:
            return 3
        if scalar < SURROGATE_END:
            return 0
        if scalar < BMP_LIMIT:
            return 3
        if scalar < SCALAR_LIMIT:
            return 4
        return 0

    def validate_unit_sequence(
        self, units: Sequence[int], length: int, start: int = 0
    ) -> bool:
        """Check that ``units[start:start + length]`` is one well-formed sequence.

        Only the byte structure is checked; the decoded value still has to
        pass ``is_valid_scalar``. Surrogates encoded as ``ED A0..BF xx`` are
        left to that check under both rule sets.
        """
        if length not in UTF8_LEAD_MASKS:
            return False
        for i in range(start, start + length):
            if not 0 <= units[i] <= self.max_unit:
                return False

        lead = units[start]
        if (lead & UTF8_LEAD_MASKS[length]) != UTF8_LEAD_MARKERS[length]:
            return False

        for i in range(start + 1, start + length):
            if (units[i] & UTF8_CONTINUATION_MASK) != UTF8_CONTINUATION_MARKER:
                return False

        if length == 2:
            return lead >= UTF8_MIN_2BYTE_LEAD
        if length == 3:
            return self._check_three_byte(lead, units[start + 1])
        if length == 4:
            return self._check_four_byte(lead, units[start + 1])
        return True

    def _check_three_byte(self, lead: int, second: int) -> bool:
        if lead != UTF8_3BYTE_OVERLONG_LEAD:
            return True
        if self.rules is Utf8RuleSet.LEGACY:
            # Historical behavior: every E0-led sequence is treated as overlong
            return False
        return second >= UTF8_3BYTE_MIN_SECOND

    def _check_four_byte(self, lead: int, second: int) -> bool:
        if lead == UTF8_4BYTE_OVERLONG_LEAD and second < UTF8_4BYTE_MIN_SECOND:
            return False
        if self.rules is Utf8RuleSet.LEGACY:
            return True
        if lead > UTF8_MAX_LEAD:
            return False
        return not (lead == UTF8_MAX_LEAD and second > UTF8_MAX_LEAD_MAX_SECOND)

    def encode(self, scalar: int, sink: Sink) -> int:
        """Append the UTF-8 form of ``scalar`` to ``sink``.

        Returns:
            Number of units written

        Raises:
            PreconditionViolation: if ``scalar`` is a surrogate or out of range
        """
        length = self.write_length(scalar)
        if length == 0:
            raise _unencodable(scalar, self.name)
        if length == 1:
            sink.append(scalar)
            return 1

        encoded = [0] * length
        value = scalar
        for i in range(length - 1, 0, -1):
            encoded[i] = UTF8_CONTINUATION_MARKER | (value & UTF8_CONTINUATION_PAYLOAD)
            value >>= 6
        encoded[0] = UTF8_LEAD_MARKERS[length] | value

        for unit in encoded:
            sink.append(unit)
        return length

    def decode(self, units: Sequence[int], start: int = 0) -> int:
        """Decode the sequence at ``start``. Input must already be validated."""
        lead = units[start]
        length = self.read_length(lead)
        if length == 1:
            return lead

        value = lead & UTF8_PAYLOAD_MASKS[length]
        for i in range(start + 1, start + length):
            value = (value << 6) | (units[i] & UTF8_CONTINUATION_PAYLOAD)
        return value


@dataclass(frozen=True)
class UTF16Codec:
    """UTF-16 codec over 16-bit code units."""

    name: ClassVar[str] = "utf-16"
    unit_bits: ClassVar[int] = 16
    unit_size: ClassVar[int] = 2
    max_unit: ClassVar[int] = 0xFFFF
    max_length: ClassVar[int] = 2

    def read_length(self, lead: int) -> int:
        if HIGH_SURROGATE_START <= lead < LOW_SURROGATE_START:
            return 2
        return 1

    def write_length(self, scalar: int) -> int:
        if scalar < 0:
            return 0
        if scalar < HIGH_SURROGATE_START:
            return 1
        if scalar < SURROGATE_END:
            return 0
        if scalar < BMP_LIMIT:
            return 1
        if scalar < SCALAR_LIMIT:
            return 2
        return 0

    def validate_unit_sequence(
        self, units: Sequence[int], length: int, start: int = 0
    ) -> bool:
        """Accept a lone non-surrogate unit or a high/low surrogate pair."""
        if length == 1:
            unit = units[start]
            if not 0 <= unit <= self.max_unit:
                return False
            return not HIGH_SURROGATE_START <= unit < SURROGATE_END
        if length == 2:
            high, low = units[start], units[start + 1]
            return (
                HIGH_SURROGATE_START <= high < LOW_SURROGATE_START
                and LOW_SURROGATE_START <= low < SURROGATE_END
            )
        return False

    def encode(self, scalar: int, sink: Sink) -> int:
        """Append one unit, or a surrogate pair for supplementary scalars.

        Raises:
            PreconditionViolation: if ``scalar`` is a surrogate or out of range
        """
        length = self.write_length(scalar)
        if length == 0:
            raise _unencodable(scalar, self.name)
        if length == 1:
            sink.append(scalar)
            return 1

        # 20-bit offset split across the pair
        offset = scalar - SUPPLEMENTARY_BASE
        sink.append(HIGH_SURROGATE_START + (offset >> 10))
        sink.append(LOW_SURROGATE_START + (offset & SURROGATE_PAYLOAD))
        return 2

    def decode(self, units: Sequence[int], start: int = 0) -> int:
        """Decode the unit or pair at ``start``. Input must already be validated."""
        lead = units[start]
        if self.read_length(lead) == 1:
            return lead
        high_bits = (lead - HIGH_SURROGATE_START) << 10
        low_bits = units[start + 1] - LOW_SURROGATE_START
        return (high_bits | low_bits) + SUPPLEMENTARY_BASE


@dataclass(frozen=True)
class UTF32Codec:
    """UTF-32 codec over 32-bit code units; every scalar is one unit."""

    name: ClassVar[str] = "utf-32"
    unit_bits: ClassVar[int] = 32
    unit_size: ClassVar[int] = 4
    max_unit: ClassVar[int] = 0xFFFFFFFF
    max_length: ClassVar[int] = 1

    def read_length(self, lead: int) -> int:
        return 1

    def write_length(self, scalar: int) -> int:
        if scalar < 0:
            return 0
        if scalar < HIGH_SURROGATE_START:
            return 1
        if scalar < SURROGATE_END:
            return 0
        if scalar < SCALAR_LIMIT:
            return 1
        return 0

    def validate_unit_sequence(
        self, units: Sequence[int], length: int, start: int = 0
    ) -> bool:
        # The unit's value is checked by is_valid_scalar after decoding
        return length == 1

    def encode(self, scalar: int, sink: Sink) -> int:
        """Append ``scalar`` unchanged.

        Raises:
            PreconditionViolation: if ``scalar`` is a surrogate or out of range
        """
        if self.write_length(scalar) == 0:
            raise _unencodable(scalar, self.name)
        sink.append(scalar)
        return 1

    def decode(self, units: Sequence[int], start: int = 0) -> int:
        return units[start]


_STRICT_UTF8 = UTF8Codec(Utf8RuleSet.STRICT)
_LEGACY_UTF8 = UTF8Codec(Utf8RuleSet.LEGACY)
_UTF16 = UTF16Codec()
_UTF32 = UTF32Codec()

# Accepted spellings for Encoding.from_name, after lowercasing and "_" -> "-"
_ENCODING_ALIASES: Dict[str, str] = {
    "utf8": "utf-8",
    "utf16": "utf-16",
    "utf32": "utf-32",
}


class Encoding(Enum):
    """Tag selecting one of the three Unicode encoding forms."""

    UTF8 = "utf-8"
    UTF16 = "utf-16"
    UTF32 = "utf-32"

    @property
    def codec(self) -> Codec:
        """Default codec for this encoding (strict UTF-8 rules)."""
        return get_codec(self)

    @property
    def unit_size(self) -> int:
        """Storage width of one code unit in bytes."""
        return self.codec.unit_size

    @classmethod
    def from_name(cls, name: str) -> "Encoding":
        """Look up an encoding by name, e.g. ``"UTF_16"`` or ``"utf8"``.

        Raises:
            ValueError: for names other than UTF-8, UTF-16 and UTF-32
        """
        normalized = name.strip().lower().replace("_", "-")
        normalized = _ENCODING_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unsupported encoding: {name!r}; expected utf-8, utf-16 or utf-32"
            ) from None

    @classmethod
    def coerce(cls, value: Union["Encoding", str]) -> "Encoding":
        """Accept either an Encoding member or its name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        raise TypeError(f"Expected Encoding or str, got {type(value).__name__}")


def get_codec(
    encoding: Union[Encoding, str],
    utf8_rules: Utf8RuleSet = Utf8RuleSet.STRICT,
) -> Codec:
    """Return the shared codec instance for ``encoding``.

    Args:
        encoding: Encoding tag or name
        utf8_rules: Rule set used when ``encoding`` is UTF-8

    Returns:
        Stateless codec instance, safe to share between threads
    """
    encoding = Encoding.coerce(encoding)
    if encoding is Encoding.UTF8:
        return _LEGACY_UTF8 if utf8_rules is Utf8RuleSet.LEGACY else _STRICT_UTF8
    if encoding is Encoding.UTF16:
        return _UTF16
    return _UTF32
