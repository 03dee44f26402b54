"""
Purchase domain entity.

The audit record written alongside a purchase-issued license. It keeps
the payment reference that makes issuance idempotent.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.domain.value_objects import clean_identifier, normalize_email


@dataclass(frozen=True)
class Purchase:
    """Purchase record linking a payment reference to a license key."""

    reference: str
    email: str
    license_key: str
    customer_reference: Optional[str]
    subscription_reference: Optional[str]
    download_token: str
    download_expires_at: datetime
    created_at: datetime

    def __post_init__(self):
        if not clean_identifier(self.reference):
            raise ValueError("Purchase reference is required")
        if not self.license_key:
            raise ValueError("License key is required")

    @classmethod
    def create(
        cls,
        reference: str,
        email: Optional[str],
        license_key: str,
        download_window: timedelta,
        customer_reference: Optional[str] = None,
        subscription_reference: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Purchase":
        """
        Create a purchase record with a fresh download token.

        Args:
            reference: Payment session reference
            email: Customer email (stored as "unknown" when missing)
            license_key: Key issued for this purchase
            download_window: How long the download token stays usable
            customer_reference: Payment-provider customer id
            subscription_reference: Payment-provider subscription id
            now: Creation time

        Returns:
            Purchase entity instance
        """
        now = now or datetime.now(timezone.utc)
        return cls(
            reference=reference.strip(),
            email=normalize_email(email) or "unknown",
            license_key=license_key,
            customer_reference=clean_identifier(customer_reference),
            subscription_reference=clean_identifier(subscription_reference),
            download_token=uuid.uuid4().hex,
            download_expires_at=now + download_window,
            created_at=now,
        )
