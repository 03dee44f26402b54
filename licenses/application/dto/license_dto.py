"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    key: str
    owner_email: Optional[str]
    status: str
    is_bound: bool
    expires_at: Optional[datetime]
    last_seen: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            key=license.key,
            owner_email=license.owner_email,
            status=license.status.value,
            is_bound=license.is_bound,
            expires_at=license.expires_at,
            last_seen=license.last_seen,
            created_at=license.created_at,
        )


@dataclass
class IssueLicenseResponseDTO:
    """DTO for issue license response."""

    license: LicenseDTO
    replayed: bool = False
    reference: Optional[str] = None
