"""Tests for Unicode scalar value validation."""

import pytest

from unicode_transcoder.character.scalar import is_surrogate, is_valid_scalar


class TestIsValidScalar:
    """Tests for the central scalar range check."""

    @pytest.mark.parametrize(
        "value", [0x0000, 0x0041, 0x007F, 0xD7FF, 0xE000, 0xFFFD, 0xFFFF, 0x10000, 0x10FFFF]
    )
    def test_accepts_scalar_values(self, value):
        """Test values inside both scalar ranges."""
        assert is_valid_scalar(value)

    @pytest.mark.parametrize("value", [0xD800, 0xDBFF, 0xDC00, 0xDFFF])
    def test_rejects_surrogates(self, value):
        """Test that the whole surrogate range is rejected."""
        assert not is_valid_scalar(value)

    @pytest.mark.parametrize("value", [0x110000, 0x7FFFFFFF, 0xFFFFFFFF, -1])
    def test_rejects_out_of_range(self, value):
        """Test values above U+10FFFF and negative values."""
        assert not is_valid_scalar(value)


class TestIsSurrogate:
    """Tests for the surrogate range helper."""

    def test_boundaries(self):
        """Test the edges of the surrogate block."""
        assert not is_surrogate(0xD7FF)
        assert is_surrogate(0xD800)
        assert is_surrogate(0xDFFF)
        assert not is_surrogate(0xE000)
