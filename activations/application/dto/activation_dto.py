"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from activations.domain.validation import ValidationResult


@dataclass
class ValidationResponseDTO:
    """DTO for a validation outcome."""

    valid: bool
    reason: str
    message: str
    expires_at: Optional[datetime]
    newly_bound: bool

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResponseDTO":
        return cls(
            valid=result.valid,
            reason=result.reason.value,
            message=result.message,
            expires_at=result.expires_at,
            newly_bound=result.newly_bound,
        )


@dataclass
class ResetLicenseResponseDTO:
    """DTO for reset license response."""

    license_key: str
    message: str = "License reset. It can now be activated on a new machine."
