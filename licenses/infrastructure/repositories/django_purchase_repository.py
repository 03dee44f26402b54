"""
Django implementation of PurchaseRepository port.
"""
from typing import Optional

from asgiref.sync import sync_to_async

from core.infrastructure.database import translate_database_errors
from licenses.domain.purchase import Purchase
from licenses.infrastructure.models import Purchase as PurchaseModel
from licenses.ports.purchase_repository import PurchaseRepository


class DjangoPurchaseRepository(PurchaseRepository):
    """Django ORM implementation of PurchaseRepository."""

    def _to_domain(self, model: PurchaseModel) -> Purchase:
        """Convert Django model to domain entity."""
        return Purchase(
            reference=model.reference,
            email=model.email,
            license_key=model.license_key,
            customer_reference=model.customer_reference,
            subscription_reference=model.subscription_reference,
            download_token=model.download_token,
            download_expires_at=model.download_expires_at,
            created_at=model.created_at,
        )

    @sync_to_async
    @translate_database_errors
    def find_by_reference(self, reference: str) -> Optional[Purchase]:
        """
        Find a purchase by payment reference.

        Args:
            reference: Payment session reference

        Returns:
            Purchase entity or None if not found
        """
        try:
            return self._to_domain(PurchaseModel.objects.get(reference=reference))
        except PurchaseModel.DoesNotExist:
            return None

    @sync_to_async
    @translate_database_errors
    def exists(self, reference: str) -> bool:
        """Check whether a purchase reference was recorded."""
        return PurchaseModel.objects.filter(reference=reference).exists()
