"""
Account domain events.
"""
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class IdentityRevoked(DomainEvent):
    """Event raised when an admin has removed an identity and its data."""

    payload_fields = ("email", "revoked_by", "license_count")

    def __init__(
        self,
        identity_id,
        email: str,
        revoked_by,
        license_count: int,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize IdentityRevoked event.

        Args:
            identity_id: Removed identity
            email: Its email
            revoked_by: Admin identity id
            license_count: Licenses removed with it
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=str(identity_id), occurred_at=occurred_at)
        self.email = email
        self.revoked_by = str(revoked_by)
        self.license_count = license_count


class RevocationStopped(DomainEvent):
    """Event raised when a revocation step failed partway."""

    payload_fields = ("failed_step",)

    def __init__(self, identity_id, failed_step: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(identity_id), occurred_at=occurred_at)
        self.failed_step = failed_step


class BetaSignupSubmitted(DomainEvent):
    """Event raised when someone joins the beta list."""

    payload_fields = ("email",)

    def __init__(self, signup_id, email: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(signup_id), occurred_at=occurred_at)
        self.email = email


class BetaSignupApproved(DomainEvent):
    """Event raised when an admin approves a signup and a key is issued."""

    payload_fields = ("email", "license_key")

    def __init__(
        self,
        signup_id,
        email: str,
        license_key: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(signup_id), occurred_at=occurred_at)
        self.email = email
        self.license_key = license_key
