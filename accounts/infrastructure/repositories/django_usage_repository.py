"""
Django implementation of UsageRepository port.
"""
from typing import Iterable

from asgiref.sync import sync_to_async
from django.db.models import Q

from accounts.infrastructure.models import TokenUsage
from accounts.ports.usage_repository import UsageRepository
from core.infrastructure.database import translate_database_errors


class DjangoUsageRepository(UsageRepository):
    """Django ORM implementation of UsageRepository."""

    @sync_to_async
    @translate_database_errors
    def delete_by_license_keys(self, license_keys: Iterable[str]) -> int:
        """Delete usage rows for the given license keys."""
        keys = [key for key in license_keys if key]
        if not keys:
            return 0
        deleted, _ = TokenUsage.objects.filter(license_key__in=keys).delete()
        return deleted

    @sync_to_async
    @translate_database_errors
    def delete_by_channel_identifier(self, channel_identifier: str) -> int:
        """Delete usage rows recorded on or by a channel handle."""
        handle = (channel_identifier or "").strip()
        if not handle:
            return 0
        deleted, _ = TokenUsage.objects.filter(
            Q(channel__iexact=handle) | Q(username__iexact=handle)
        ).delete()
        return deleted
