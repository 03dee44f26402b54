"""
License domain events.

Domain events represent something that happened in the license domain.
"""

from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseIssued(DomainEvent):
    """Event raised when a new license is created."""

    payload_fields = ("owner_email", "source", "reference", "expires_at")

    def __init__(
        self,
        license_key: str,
        owner_email: Optional[str],
        source: str,
        reference: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseIssued event.

        Args:
            license_key: Issued key
            owner_email: Owner email
            source: "purchase" or "approval"
            reference: Purchase reference, for purchase-issued licenses
            expires_at: License expiry
            occurred_at: When the event occurred
        """
        super().__init__(aggregate_id=license_key, occurred_at=occurred_at)
        self.owner_email = owner_email
        self.source = source
        self.reference = reference
        self.expires_at = expires_at


class LicenseIssuanceReplayed(DomainEvent):
    """Event raised when a purchase event arrives again for an issued license."""

    payload_fields = ("reference",)

    def __init__(
        self,
        license_key: str,
        reference: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=license_key, occurred_at=occurred_at)
        self.reference = reference
