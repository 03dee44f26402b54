"""
Validation result value object.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import ValidationReason

MESSAGES = {
    ValidationReason.VALID: "License activated.",
    ValidationReason.NOT_FOUND: "License key not found.",
    ValidationReason.INACTIVE: "License is inactive.",
    ValidationReason.EXPIRED: "License expired.",
    ValidationReason.MACHINE_MISMATCH: "License is already in use on another machine.",
}


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a license key for a machine.

    Failures are ordinary results, never exceptions. Only a valid
    result carries the expiry, so failures reveal nothing more.
    """

    valid: bool
    reason: ValidationReason
    expires_at: Optional[datetime] = None
    newly_bound: bool = False

    @classmethod
    def rejected(cls, reason: ValidationReason) -> "ValidationResult":
        return cls(valid=False, reason=reason)

    @classmethod
    def accepted(
        cls, expires_at: Optional[datetime], newly_bound: bool = False
    ) -> "ValidationResult":
        return cls(
            valid=True,
            reason=ValidationReason.VALID,
            expires_at=expires_at,
            newly_bound=newly_bound,
        )

    @property
    def message(self) -> str:
        """User-facing message for this outcome."""
        return MESSAGES[self.reason]
