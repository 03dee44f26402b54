"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from datetime import datetime
from typing import Callable, Optional

from core.domain.exceptions import IssuanceExhaustedError, LicenseKeyConflictError
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.domain.purchase import Purchase
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

KeyGenerator = Callable[[], str]
PurchaseFactory = Callable[[str], Purchase]


class LicenseIssuer:
    """Domain service that creates licenses under fresh unique keys."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        max_attempts: int,
        key_generator: Optional[KeyGenerator] = None,
    ):
        self.license_repository = license_repository
        self.max_attempts = max_attempts
        self.key_generator = key_generator or generate_license_key

    async def issue(
        self,
        owner_email: Optional[str],
        expires_at: Optional[datetime],
        now: datetime,
        purchase_factory: Optional[PurchaseFactory] = None,
    ) -> License:
        """
        Create and persist a license, retrying on key collisions.

        Args:
            owner_email: Owner email
            expires_at: License expiry, None for never
            now: Creation time
            purchase_factory: Builds the purchase record for a given key

        Returns:
            Persisted License entity

        Raises:
            IssuanceExhaustedError: If every attempt collided
            DuplicatePurchaseReferenceError: If the purchase was recorded meanwhile
        """
        for attempt in range(1, self.max_attempts + 1):
            key = self.key_generator()
            license = License.create(
                key=key, owner_email=owner_email, expires_at=expires_at, now=now
            )
            purchase = purchase_factory(key) if purchase_factory else None
            try:
                return await self.license_repository.create(license, purchase)
            except LicenseKeyConflictError:
                logger.warning(
                    "License key collision on attempt %d of %d", attempt, self.max_attempts
                )

        logger.error(
            "License issuance exhausted after %d attempts for %s",
            self.max_attempts,
            owner_email,
        )
        raise IssuanceExhaustedError(
            f"Could not generate a unique license key after {self.max_attempts} attempts"
        )
