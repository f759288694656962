"""Unit tests for domain value objects."""

import pytest

from potion_shop.domain.value_objects import PotionNumber


class TestPotionNumber:
    """Tests for PotionNumber value object."""

    def test_valid_potion_number(self):
        """Valid potion numbers should be accepted."""
        pn = PotionNumber("POT-2026-0001")
        assert pn.value == "POT-2026-0001"

    def test_str_returns_value(self):
        """str(PotionNumber) should return the underlying string."""
        assert str(PotionNumber("POT-2026-0042")) == "POT-2026-0042"

    def test_parts(self):
        """Prefix, year and sequence should be readable."""
        pn = PotionNumber("POT-2026-0042")
        assert pn.prefix == "POT"
        assert pn.year == 2026
        assert pn.sequence == 42

    def test_equality(self):
        """Two PotionNumbers with the same value should be equal."""
        assert PotionNumber("POT-2026-0001") == PotionNumber("POT-2026-0001")

    def test_immutability(self):
        """PotionNumber should be immutable (frozen dataclass)."""
        pn = PotionNumber("POT-2026-0001")
        with pytest.raises((AttributeError, TypeError)):
            pn.value = "POT-2026-0002"  # type: ignore[misc]

    def test_build_pads_sequence(self):
        """Sequences should be zero-padded to four digits."""
        assert PotionNumber.build("POT", 2026, 7).value == "POT-2026-0007"

    def test_build_wider_sequence(self):
        """Sequences past 9999 should widen instead of failing."""
        assert PotionNumber.build("POT", 2026, 12345).value == "POT-2026-12345"

    def test_build_rejects_zero_sequence(self):
        """Sequence numbers start at 1."""
        with pytest.raises(ValueError, match="must be positive"):
            PotionNumber.build("POT", 2026, 0)

    def test_invalid_lowercase_prefix(self):
        """Lowercase prefix should raise ValueError."""
        with pytest.raises(ValueError, match="Invalid potion number format"):
            PotionNumber("pot-2026-0001")

    def test_invalid_short_sequence(self):
        """Sequence shorter than four digits should raise ValueError."""
        with pytest.raises(ValueError, match="Invalid potion number format"):
            PotionNumber("POT-2026-001")

    def test_invalid_empty_string(self):
        """Empty string should raise ValueError."""
        with pytest.raises(ValueError, match="Invalid potion number format"):
            PotionNumber("")

    def test_check_prefix_accepts_uppercase(self):
        """Uppercase letter prefixes should pass through unchanged."""
        assert PotionNumber.check_prefix("ELX") == "ELX"

    @pytest.mark.parametrize("prefix", ["Pot", "POT2", "", "PO-T"])
    def test_check_prefix_rejects_other_prefixes(self, prefix):
        """Prefixes that could not build a valid number should raise ValueError."""
        with pytest.raises(ValueError, match="Invalid potion number prefix"):
            PotionNumber.check_prefix(prefix)
