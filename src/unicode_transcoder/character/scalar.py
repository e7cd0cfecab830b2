"""Unicode scalar value validation.

Every encoding's validation path funnels decoded values through
``is_valid_scalar``; no codec repeats the range check on its own.
"""

SURROGATE_RANGE_START = 0xD800
SURROGATE_RANGE_END = 0xDFFF
MAX_SCALAR = 0x10FFFF


def is_valid_scalar(value: int) -> bool:
    """Return True iff ``value`` is a Unicode scalar value.

    Scalar values are ``[0, 0xD7FF]`` and ``[0xE000, 0x10FFFF]``; the
    surrogate range and anything above ``0x10FFFF`` are rejected.
    """
    if value < 0:
        return False
    if value < SURROGATE_RANGE_START:
        return True
    if value <= SURROGATE_RANGE_END:
        return False
    return value <= MAX_SCALAR


def is_surrogate(value: int) -> bool:
    """Return True iff ``value`` lies in the UTF-16 surrogate range."""
    return SURROGATE_RANGE_START <= value <= SURROGATE_RANGE_END
