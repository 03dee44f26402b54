"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import (
    LicenseStatus,
    ValidationReason,
    clean_identifier,
    normalize_email,
)
from licenses.domain.license_key import MAX_KEY_LENGTH


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A key entitling at most one bound machine to use the software
    until it expires or is revoked.
    """

    key: str
    owner_email: Optional[str]
    status: LicenseStatus
    machine_id: Optional[str]
    expires_at: Optional[datetime]
    last_seen: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.key or not self.key.strip():
            raise ValueError("License key cannot be empty")
        if len(self.key) > MAX_KEY_LENGTH:
            raise ValueError("License key too long")
        if self.owner_email is not None:
            object.__setattr__(self, "owner_email", normalize_email(self.owner_email) or None)

    @classmethod
    def create(
        cls,
        key: str,
        owner_email: Optional[str],
        expires_at: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> "License":
        """
        Create a new, active and unbound License.

        Args:
            key: Generated license key
            owner_email: Purchasing or approved email
            expires_at: Optional expiration datetime
            now: Creation time (defaults to current UTC time)

        Returns:
            License entity instance
        """
        now = now or _utcnow()
        return cls(
            key=key,
            owner_email=owner_email,
            status=LicenseStatus.ACTIVE,
            machine_id=None,
            expires_at=expires_at,
            last_seen=None,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_bound(self) -> bool:
        """True once a machine has claimed this license."""
        return self.machine_id is not None

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """Expiry is derived at read time; it is never a stored status."""
        if self.expires_at is None:
            return False
        return self.expires_at < (current_time or _utcnow())

    def check(
        self,
        machine_id: Optional[str] = None,
        current_time: Optional[datetime] = None,
    ) -> ValidationReason:
        """
        Run the validation rules against a requesting machine.

        The first failing rule wins. A request without a machine id is
        informational and never produces a mismatch.

        Args:
            machine_id: Requesting machine, if any
            current_time: Time to compare expiry against

        Returns:
            ValidationReason.VALID or the reason validation failed
        """
        if self.status != LicenseStatus.ACTIVE:
            return ValidationReason.INACTIVE
        if self.is_expired(current_time):
            return ValidationReason.EXPIRED

        requested = clean_identifier(machine_id)
        if self.is_bound and requested and requested != self.machine_id:
            return ValidationReason.MACHINE_MISMATCH
        return ValidationReason.VALID

    def should_bind(self, machine_id: Optional[str]) -> bool:
        """First activation with a concrete machine id claims the license."""
        return not self.is_bound and clean_identifier(machine_id) is not None
