"""
License issuance handlers.

Handle the purchase-completed and beta-approval flows.
"""

import logging
from typing import Optional

from django.utils import timezone

from core.config import LicensingConfig
from core.domain.exceptions import (
    DuplicatePurchaseReferenceError,
    IssuanceExhaustedError,
    PurchaseRevokedError,
)
from core.domain.value_objects import Email, clean_identifier, normalize_email
from core.infrastructure.events import event_bus
from core.metrics import license_issuance_exhausted_total
from licenses.application.commands.issue_from_approval import IssueFromApprovalCommand
from licenses.application.commands.issue_from_purchase import IssueFromPurchaseCommand
from licenses.application.dto.license_dto import IssueLicenseResponseDTO, LicenseDTO
from licenses.domain.events import LicenseIssuanceReplayed, LicenseIssued
from licenses.domain.license import License
from licenses.domain.purchase import Purchase
from licenses.domain.services import KeyGenerator, LicenseIssuer
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.purchase_repository import PurchaseRepository

logger = logging.getLogger(__name__)


class IssueFromPurchaseHandler:
    """Handler for IssueFromPurchaseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        purchase_repository: PurchaseRepository,
        config: LicensingConfig,
        key_generator: Optional[KeyGenerator] = None,
    ):
        """Initialize handler with repositories and configuration."""
        self.license_repository = license_repository
        self.purchase_repository = purchase_repository
        self.config = config
        self.issuer = LicenseIssuer(
            license_repository,
            max_attempts=config.key_generation_attempts,
            key_generator=key_generator,
        )

    async def handle(self, command: IssueFromPurchaseCommand) -> IssueLicenseResponseDTO:
        """
        Handle issue-from-purchase command.

        Args:
            command: IssueFromPurchaseCommand

        Returns:
            IssueLicenseResponseDTO; ``replayed`` is True when the purchase
            had already produced this license

        Raises:
            PurchaseRevokedError: If the purchase's license was revoked
            IssuanceExhaustedError: If no unique key could be generated
        """
        reference = clean_identifier(command.reference)
        if not reference:
            raise ValueError("Purchase reference is required")

        existing = await self.license_repository.find_by_reference(reference)
        if existing:
            return await self._replayed(existing, reference)

        if await self.purchase_repository.exists(reference):
            logger.warning("Purchase %s replayed after its license was revoked", reference)
            raise PurchaseRevokedError()

        now = timezone.now()
        expires_at = command.custom_expiry or now + self.config.purchase_grace

        def purchase_factory(key: str) -> Purchase:
            return Purchase.create(
                reference=reference,
                email=command.email,
                license_key=key,
                download_window=self.config.purchase_grace,
                customer_reference=command.customer_reference,
                subscription_reference=command.subscription_reference,
                now=now,
            )

        try:
            license = await self.issuer.issue(
                owner_email=normalize_email(command.email) or None,
                expires_at=expires_at,
                now=now,
                purchase_factory=purchase_factory,
            )
        except DuplicatePurchaseReferenceError:
            # A concurrent delivery of the same purchase won the insert.
            winner = await self.license_repository.find_by_reference(reference)
            if winner is None:
                raise PurchaseRevokedError()
            return await self._replayed(winner, reference)
        except IssuanceExhaustedError:
            license_issuance_exhausted_total.inc()
            raise

        logger.info("Issued license %s for purchase %s", license.key, reference)
        await event_bus.publish(
            LicenseIssued(
                license_key=license.key,
                owner_email=license.owner_email,
                source="purchase",
                reference=reference,
                expires_at=license.expires_at,
            )
        )
        return IssueLicenseResponseDTO(
            license=LicenseDTO.from_entity(license), replayed=False, reference=reference
        )

    async def _replayed(self, license: License, reference: str) -> IssueLicenseResponseDTO:
        logger.info("Purchase %s already issued license %s", reference, license.key)
        await event_bus.publish(
            LicenseIssuanceReplayed(license_key=license.key, reference=reference)
        )
        return IssueLicenseResponseDTO(
            license=LicenseDTO.from_entity(license), replayed=True, reference=reference
        )


class IssueFromApprovalHandler:
    """
    Handler for IssueFromApprovalCommand.

    Approvals are not replay-protected: each approval is a separate
    administrative decision and always gets a new key.
    """

    def __init__(
        self,
        license_repository: LicenseRepository,
        config: LicensingConfig,
        key_generator: Optional[KeyGenerator] = None,
    ):
        """Initialize handler with repository and configuration."""
        self.license_repository = license_repository
        self.config = config
        self.issuer = LicenseIssuer(
            license_repository,
            max_attempts=config.key_generation_attempts,
            key_generator=key_generator,
        )

    async def handle(self, command: IssueFromApprovalCommand) -> IssueLicenseResponseDTO:
        """
        Handle issue-from-approval command.

        Args:
            command: IssueFromApprovalCommand

        Returns:
            IssueLicenseResponseDTO for the new license

        Raises:
            ValueError: If the email is invalid
            IssuanceExhaustedError: If no unique key could be generated
        """
        email = Email(command.email)
        now = timezone.now()
        expires_at = command.expires_at
        if expires_at is None and self.config.approval_default_ttl is not None:
            expires_at = now + self.config.approval_default_ttl

        try:
            license = await self.issuer.issue(
                owner_email=str(email), expires_at=expires_at, now=now
            )
        except IssuanceExhaustedError:
            license_issuance_exhausted_total.inc()
            raise

        logger.info("Issued approval license %s for %s", license.key, email)
        await event_bus.publish(
            LicenseIssued(
                license_key=license.key,
                owner_email=license.owner_email,
                source="approval",
                expires_at=license.expires_at,
            )
        )
        return IssueLicenseResponseDTO(license=LicenseDTO.from_entity(license))
