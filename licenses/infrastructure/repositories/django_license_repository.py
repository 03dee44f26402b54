"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from django.utils import timezone

from core.domain.exceptions import (
    DuplicatePurchaseReferenceError,
    LicenseKeyConflictError,
)
from core.domain.value_objects import LicenseStatus, normalize_email
from core.infrastructure.database import translate_database_errors
from licenses.domain.license import License
from licenses.domain.purchase import Purchase
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.models import Purchase as PurchaseModel
from licenses.ports.license_repository import UPDATABLE_FIELDS, LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            key=model.key,
            owner_email=model.owner_email,
            status=LicenseStatus.parse(model.status),
            machine_id=model.machine_id,
            expires_at=model.expires_at,
            last_seen=model.last_seen,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _purchase_model(purchase: Purchase) -> PurchaseModel:
        return PurchaseModel(
            reference=purchase.reference,
            email=purchase.email,
            license_key=purchase.license_key,
            customer_reference=purchase.customer_reference,
            subscription_reference=purchase.subscription_reference,
            download_token=purchase.download_token,
            download_expires_at=purchase.download_expires_at,
            created_at=purchase.created_at,
        )

    @sync_to_async
    @translate_database_errors
    def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        try:
            return self._to_domain(LicenseModel.objects.get(key=key))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    @translate_database_errors
    def create(self, license: License, purchase: Optional[Purchase] = None) -> License:
        """
        Insert a license and, atomically with it, its purchase record.

        Args:
            license: License entity to insert
            purchase: Optional purchase record

        Returns:
            Persisted license entity
        """
        with transaction.atomic():
            try:
                with transaction.atomic():
                    model = LicenseModel.objects.create(
                        key=license.key,
                        owner_email=license.owner_email,
                        status=license.status.value,
                        machine_id=license.machine_id,
                        expires_at=license.expires_at,
                        last_seen=license.last_seen,
                        created_at=license.created_at,
                        updated_at=license.updated_at,
                    )
            except IntegrityError as exc:
                raise LicenseKeyConflictError(f"License key {license.key} already exists") from exc

            if purchase is not None:
                try:
                    with transaction.atomic():
                        self._purchase_model(purchase).save(force_insert=True)
                except IntegrityError as exc:
                    raise DuplicatePurchaseReferenceError(
                        f"Purchase {purchase.reference} already recorded"
                    ) from exc

        return self._to_domain(model)

    @sync_to_async
    @translate_database_errors
    def update(self, key: str, /, **fields) -> bool:
        """
        Apply a partial update to one license.

        Args:
            key: License key
            **fields: Fields to change

        Returns:
            True if the license existed
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update license fields: {sorted(unknown)}")
        if isinstance(fields.get("status"), LicenseStatus):
            fields["status"] = fields["status"].value
        if "owner_email" in fields:
            fields["owner_email"] = normalize_email(fields["owner_email"]) or None
        updated = LicenseModel.objects.filter(key=key).update(
            updated_at=timezone.now(), **fields
        )
        return updated > 0

    @sync_to_async
    @translate_database_errors
    def bind_machine(self, key: str, machine_id: str, seen_at: datetime) -> bool:
        """
        Compare-and-set the machine binding.

        Args:
            key: License key
            machine_id: Machine claiming the license
            seen_at: Validation time

        Returns:
            True if this call set the binding
        """
        updated = LicenseModel.objects.filter(key=key, machine_id__isnull=True).update(
            machine_id=machine_id, last_seen=seen_at, updated_at=seen_at
        )
        return updated == 1

    @sync_to_async
    @translate_database_errors
    def touch(self, key: str, seen_at: datetime) -> bool:
        """Refresh last_seen for a license."""
        return LicenseModel.objects.filter(key=key).update(last_seen=seen_at) == 1

    @sync_to_async
    @translate_database_errors
    def reset_binding(self, key: str, owner_email: str) -> bool:
        """
        Unbind and reactivate a license owned by the given email.

        Args:
            key: License key
            owner_email: Requesting owner

        Returns:
            True if the owner's license was reset
        """
        email = normalize_email(owner_email)
        if not email:
            return False
        updated = LicenseModel.objects.filter(key=key, owner_email=email).update(
            machine_id=None,
            status=LicenseStatus.ACTIVE.value,
            last_seen=None,
            updated_at=timezone.now(),
        )
        return updated > 0

    @sync_to_async
    @translate_database_errors
    def delete(self, key: str) -> bool:
        """Delete a license; absent keys are a no-op."""
        deleted, _ = LicenseModel.objects.filter(key=key).delete()
        return deleted > 0

    @sync_to_async
    @translate_database_errors
    def delete_by_owner(self, email: str) -> int:
        """Delete every license of an owner."""
        email = normalize_email(email)
        if not email:
            return 0
        deleted, _ = LicenseModel.objects.filter(owner_email=email).delete()
        return deleted

    @sync_to_async
    @translate_database_errors
    def find_by_owner(self, email: str) -> List[License]:
        """
        Find all licenses of an owner.

        Args:
            email: Owner email

        Returns:
            List of License entities
        """
        email = normalize_email(email)
        if not email:
            return []
        models = LicenseModel.objects.filter(owner_email=email)
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @translate_database_errors
    def find_by_reference(self, reference: str) -> Optional[License]:
        """
        Find the license issued for a purchase reference.

        Args:
            reference: Payment session reference

        Returns:
            License entity or None if no live license exists
        """
        key = (
            PurchaseModel.objects.filter(reference=reference)
            .values_list("license_key", flat=True)
            .first()
        )
        if key is None:
            return None
        try:
            return self._to_domain(LicenseModel.objects.get(key=key))
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    @translate_database_errors
    def count_by_owners(self, emails: Iterable[str]) -> Dict[str, Tuple[int, int]]:
        """
        Count total and active licenses per owner email.

        Args:
            emails: Owner emails

        Returns:
            Mapping of email to (total, active)
        """
        wanted = {normalize_email(email) for email in emails} - {""}
        if not wanted:
            return {}
        rows = (
            LicenseModel.objects.filter(owner_email__in=wanted)
            .values("owner_email")
            .annotate(
                total=Count("id"),
                active=Count("id", filter=Q(status=LicenseStatus.ACTIVE.value)),
            )
        )
        return {row["owner_email"]: (row["total"], row["active"]) for row in rows}
