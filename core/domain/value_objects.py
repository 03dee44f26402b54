"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: Optional[str]) -> str:
    """Trim and lower-case an email; None becomes an empty string."""
    return str(value or "").strip().lower()


@dataclass(frozen=True)
class Email:
    """Email value object, always stored normalized."""

    value: str

    def __post_init__(self):
        """Normalize and validate email format."""
        normalized = normalize_email(self.value)
        if not normalized or "@" not in normalized:
            raise ValueError(f"Invalid email address: {self.value}")
        object.__setattr__(self, "value", normalized)

    @classmethod
    def is_well_formed(cls, value: Optional[str]) -> bool:
        """Check the stricter shape used for public signups."""
        return bool(EMAIL_PATTERN.match(str(value or "").strip()))

    def __str__(self) -> str:
        """Return email as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LicenseStatus":
        """Read a stored status; anything unrecognized is inactive."""
        if str(value or "").strip().lower() == cls.ACTIVE.value:
            return cls.ACTIVE
        return cls.INACTIVE

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class ValidationReason(Enum):
    """Outcome of a license validation."""

    VALID = "valid"
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    MACHINE_MISMATCH = "machine_mismatch"

    def __str__(self) -> str:
        return self.value


class SignupStatus(Enum):
    """Beta signup status."""

    PENDING = "pending"
    APPROVED = "approved"

    def __str__(self) -> str:
        return self.value


def clean_identifier(value: Optional[str]) -> Optional[str]:
    """Trim an opaque identifier; blank becomes None."""
    cleaned = str(value or "").strip()
    return cleaned or None
