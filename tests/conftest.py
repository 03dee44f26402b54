"""
Pytest configuration and shared fixtures.
"""

import asyncio
from dataclasses import replace
from datetime import timedelta

import pytest
from asgiref.sync import sync_to_async
from django.contrib.auth import get_user_model
from django.utils import timezone

from accounts.infrastructure.models import Profile
from accounts.infrastructure.repositories.django_beta_signup_repository import (
    DjangoBetaSignupRepository,
)
from accounts.infrastructure.repositories.django_identity_directory import (
    DjangoIdentityDirectory,
)
from accounts.infrastructure.repositories.django_usage_repository import DjangoUsageRepository
from core.config import LicensingConfig
from core.domain.exceptions import DuplicatePurchaseReferenceError, LicenseKeyConflictError
from core.domain.value_objects import LicenseStatus, normalize_email
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_purchase_repository import (
    DjangoPurchaseRepository,
)
from licenses.ports.license_repository import UPDATABLE_FIELDS, LicenseRepository
from licenses.ports.purchase_repository import PurchaseRepository

FEED_TOKEN = "test-purchase-feed-token"


class InMemoryLicenseRepository(LicenseRepository):
    """Dict-backed LicenseRepository for handler and engine tests."""

    def __init__(self):
        self.licenses = {}
        self.purchases = {}

    async def find_by_key(self, key):
        # Yield so gathered callers interleave their reads and writes.
        await asyncio.sleep(0)
        return self.licenses.get(key)

    async def create(self, license, purchase=None):
        if license.key in self.licenses:
            raise LicenseKeyConflictError()
        if purchase is not None and purchase.reference in self.purchases:
            raise DuplicatePurchaseReferenceError()
        self.licenses[license.key] = license
        if purchase is not None:
            self.purchases[purchase.reference] = purchase
        return license

    async def update(self, key, /, **fields):
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update license fields: {sorted(unknown)}")
        if key not in self.licenses:
            return False
        self.licenses[key] = replace(self.licenses[key], **fields)
        return True

    async def bind_machine(self, key, machine_id, seen_at):
        current = self.licenses.get(key)
        if current is None or current.machine_id is not None:
            return False
        self.licenses[key] = replace(current, machine_id=machine_id, last_seen=seen_at)
        return True

    async def touch(self, key, seen_at):
        if key not in self.licenses:
            return False
        self.licenses[key] = replace(self.licenses[key], last_seen=seen_at)
        return True

    async def reset_binding(self, key, owner_email):
        current = self.licenses.get(key)
        if current is None or current.owner_email != normalize_email(owner_email):
            return False
        self.licenses[key] = replace(
            current, machine_id=None, status=LicenseStatus.ACTIVE, last_seen=None
        )
        return True

    async def delete(self, key):
        return self.licenses.pop(key, None) is not None

    async def delete_by_owner(self, email):
        keys = [k for k, lic in self.licenses.items() if lic.owner_email == normalize_email(email)]
        for key in keys:
            del self.licenses[key]
        return len(keys)

    async def find_by_owner(self, email):
        return [lic for lic in self.licenses.values() if lic.owner_email == normalize_email(email)]

    async def find_by_reference(self, reference):
        purchase = self.purchases.get(reference)
        return self.licenses.get(purchase.license_key) if purchase else None

    async def count_by_owners(self, emails):
        counts = {}
        for email in {normalize_email(e) for e in emails}:
            owned = [lic for lic in self.licenses.values() if lic.owner_email == email]
            if owned:
                active = sum(1 for lic in owned if lic.status is LicenseStatus.ACTIVE)
                counts[email] = (len(owned), active)
        return counts


class InMemoryPurchaseRepository(PurchaseRepository):
    """Reads purchases recorded by an InMemoryLicenseRepository."""

    def __init__(self, license_repository: InMemoryLicenseRepository):
        self.license_repository = license_repository

    async def find_by_reference(self, reference):
        return self.license_repository.purchases.get(reference)

    async def exists(self, reference):
        return reference in self.license_repository.purchases


def sequence_keys(*keys):
    """Key generator yielding the given keys in order."""
    iterator = iter(keys)
    return lambda: next(iterator)


@pytest.fixture
def licensing_config():
    """Fixture for LicensingConfig with default tunables."""
    return LicensingConfig(purchase_feed_token=FEED_TOKEN)


@pytest.fixture
def memory_license_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def memory_purchase_repository(memory_license_repository):
    """Fixture for an in-memory PurchaseRepository."""
    return InMemoryPurchaseRepository(memory_license_repository)


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def purchase_repository():
    """Fixture for PurchaseRepository."""
    return DjangoPurchaseRepository()


@pytest.fixture
def identity_directory():
    """Fixture for IdentityDirectory."""
    return DjangoIdentityDirectory()


@pytest.fixture
def usage_repository():
    """Fixture for UsageRepository."""
    return DjangoUsageRepository()


@pytest.fixture
def beta_signup_repository():
    """Fixture for BetaSignupRepository."""
    return DjangoBetaSignupRepository()


@pytest.fixture
def sample_license():
    """Fixture for an active, unbound License entity expiring in 30 days."""
    return License.create(
        key="VIRI-ABCD-EFGH-JKLM-NPQR",
        owner_email="Owner@Example.com",
        expires_at=timezone.now() + timedelta(days=30),
    )


def create_user(email, is_admin=False, channel_identifier=""):
    """Create an auth user with its profile."""
    user = get_user_model().objects.create_user(
        username=email, email=email, password="test-password"
    )
    Profile.objects.create(
        user=user, is_admin=is_admin, channel_identifier=channel_identifier
    )
    return user


acreate_user = sync_to_async(create_user)


def create_license(key, owner_email="owner@example.com", **fields):
    """Insert a license row, active and expiring in 30 days unless overridden."""
    now = timezone.now()
    values = {
        "status": "active",
        "expires_at": now + timedelta(days=30),
        "created_at": now,
        "updated_at": now,
    }
    values.update(fields)
    return LicenseModel.objects.create(key=key, owner_email=owner_email, **values)


@pytest.fixture
def db_license(db):
    """Fixture for a stored, unbound license owned by owner@example.com."""
    return create_license("VIRI-ABCD-EFGH-JKLM-NPQR")


@pytest.fixture
def admin_user(db):
    """Fixture for an admin user."""
    return create_user("admin@example.com", is_admin=True)


@pytest.fixture
def owner_user(db):
    """Fixture for a regular user owning licenses."""
    return create_user("owner@example.com", channel_identifier="OwnerChannel")


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
