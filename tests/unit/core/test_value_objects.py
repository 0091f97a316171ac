"""
Unit tests for core value objects and domain exceptions.
"""
import pytest

from core.domain.exceptions import (
    CardExpiredError,
    CardValidationError,
    DeviceConflictError,
    DomainException,
)
from core.domain.value_objects import CardKey, CardStatus, HardwareId


class TestHardwareId:
    """Tests for HardwareId value object."""

    def test_valid_hwid(self):
        """Test valid lowercase hwid."""
        hwid = HardwareId("0123456789abcdef0123456789abcdef")
        assert str(hwid) == "0123456789abcdef0123456789abcdef"

    def test_uppercase_hwid_is_normalised(self):
        """Test uppercase input is stored lowercase."""
        hwid = HardwareId("0123456789ABCDEF0123456789ABCDEF")
        assert hwid.value == "0123456789abcdef0123456789abcdef"

    def test_mixed_case_hwids_are_equal(self):
        """Test hwids differing only in case compare equal."""
        assert HardwareId("A" * 32) == HardwareId("a" * 32)

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "a" * 31,
            "a" * 33,
            "g" * 32,
            "0123456789abcdef-123456789abcdef",
            "a" * 32 + "\n",
            " " + "a" * 32,
            None,
            12345,
        ],
    )
    def test_invalid_hwid(self, value):
        """Test malformed hwids are rejected."""
        with pytest.raises(ValueError, match="32 hexadecimal"):
            HardwareId(value)


class TestCardKey:
    """Tests for CardKey value object."""

    def test_valid_key(self):
        """Test key within bounds."""
        assert str(CardKey("abcdefgh")) == "abcdefgh"
        assert CardKey("k" * 64).value == "k" * 64

    def test_too_short(self):
        """Test 7 character key is rejected."""
        with pytest.raises(ValueError, match="8-64"):
            CardKey("abcdefg")

    def test_too_long(self):
        """Test 65 character key is rejected."""
        with pytest.raises(ValueError, match="8-64"):
            CardKey("k" * 65)

    def test_not_a_string(self):
        """Test non-string key is rejected."""
        with pytest.raises(ValueError, match="string"):
            CardKey(12345678)


class TestCardStatus:
    """Tests for CardStatus enum."""

    def test_values(self):
        """Test status wire values."""
        assert [s.value for s in CardStatus] == ["unused", "used", "expired"]
        assert str(CardStatus.USED) == "used"


class TestDomainExceptions:
    """Tests for domain exception codes and context."""

    def test_codes(self):
        """Test machine-readable codes."""
        assert CardValidationError().code == "VALIDATION_ERROR"
        assert CardExpiredError().code == "CARD_EXPIRED"
        assert DeviceConflictError().code == "DEVICE_CONFLICT"

    def test_context_defaults_to_empty(self):
        """Test context is an empty dict when not given."""
        assert DomainException("boom").context == {}

    def test_context_is_kept(self):
        """Test context fields are carried on the exception."""
        exc = CardExpiredError(context={"expiredAt": "2024-01-01T00:00:00+00:00"})
        assert exc.context["expiredAt"] == "2024-01-01T00:00:00+00:00"
        assert isinstance(exc, DomainException)
