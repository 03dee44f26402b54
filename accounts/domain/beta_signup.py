"""
BetaSignup domain entity.
"""
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, SignupStatus


@dataclass(frozen=True)
class BetaSignup:
    """
    Request to join the beta, pending until an admin approves it.
    """

    id: Optional[int]
    name: str
    email: str
    channel_identifier: str
    content_type: Optional[str]
    message: Optional[str]
    status: SignupStatus
    license_key: Optional[str]
    created_at: datetime
    approved_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        name: str,
        email: str,
        channel_identifier: str,
        content_type: Optional[str] = None,
        message: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "BetaSignup":
        """
        Create a new pending signup.

        Args:
            name: Display name
            email: Contact email
            channel_identifier: Streaming channel handle
            content_type: Kind of content the applicant makes
            message: Free-form note
            now: Creation time (defaults to current UTC time)

        Returns:
            BetaSignup entity instance

        Raises:
            ValueError: If a required field is blank or the email is malformed
        """
        name = (name or "").strip()
        channel_identifier = (channel_identifier or "").strip()
        if not name or not (email or "").strip() or not channel_identifier:
            raise ValueError("Name, email, and channel handle are required.")
        if not Email.is_well_formed(email):
            raise ValueError("Invalid email address.")

        return cls(
            id=None,
            name=name,
            email=str(Email(email)),
            channel_identifier=channel_identifier,
            content_type=content_type or None,
            message=(message or "").strip() or None,
            status=SignupStatus.PENDING,
            license_key=None,
            created_at=now or datetime.now(timezone.utc),
        )

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ""

    def approve(self, license_key: str, now: Optional[datetime] = None) -> "BetaSignup":
        """Return a copy approved with the issued key."""
        return replace(
            self,
            status=SignupStatus.APPROVED,
            license_key=license_key,
            approved_at=now or datetime.now(timezone.utc),
        )
