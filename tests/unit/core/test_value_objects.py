"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import (
    Email,
    LicenseStatus,
    ValidationReason,
    clean_identifier,
    normalize_email,
)


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_email_is_normalized(self):
        """Test surrounding whitespace and case are dropped."""
        assert str(Email("  Someone@Example.COM ")) == "someone@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_invalid_email_empty(self):
        """Test invalid empty email."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("")

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("a@b.co", True),
            (" a@b.co ", True),
            ("a@b", False),
            ("a b@c.de", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_well_formed(self, value, expected):
        assert Email.is_well_formed(value) is expected


class TestNormalizeEmail:
    def test_none_becomes_empty(self):
        assert normalize_email(None) == ""

    def test_trims_and_lowercases(self):
        assert normalize_email(" X@Y.Z ") == "x@y.z"


class TestLicenseStatus:
    """Tests for LicenseStatus value object."""

    def test_parse_active(self):
        assert LicenseStatus.parse("active") is LicenseStatus.ACTIVE
        assert LicenseStatus.parse(" ACTIVE ") is LicenseStatus.ACTIVE

    @pytest.mark.parametrize("raw", ["inactive", "suspended", "", None, "revoked"])
    def test_anything_else_is_inactive(self, raw):
        """Unrecognized stored statuses never validate."""
        assert LicenseStatus.parse(raw) is LicenseStatus.INACTIVE

    def test_str(self):
        assert str(LicenseStatus.ACTIVE) == "active"


class TestValidationReason:
    def test_values(self):
        assert ValidationReason.MACHINE_MISMATCH.value == "machine_mismatch"
        assert str(ValidationReason.NOT_FOUND) == "not_found"


class TestCleanIdentifier:
    @pytest.mark.parametrize("raw", [None, "", "   ", "\t\n"])
    def test_blank_is_none(self, raw):
        assert clean_identifier(raw) is None

    def test_trims(self):
        assert clean_identifier("  machine-1 ") == "machine-1"
