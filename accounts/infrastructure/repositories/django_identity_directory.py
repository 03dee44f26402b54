"""
Django implementation of IdentityDirectory port.

Identities are Django auth users; licensing attributes live on Profile.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.contrib.auth import get_user_model
from django.db import transaction

from accounts.domain.identity import Identity
from accounts.infrastructure.models import Profile
from accounts.ports.identity_directory import IdentityDirectory
from core.domain.value_objects import normalize_email
from core.infrastructure.database import translate_database_errors


def _parse_id(identity_id) -> Optional[int]:
    try:
        return int(str(identity_id).strip())
    except (TypeError, ValueError):
        return None


class DjangoIdentityDirectory(IdentityDirectory):
    """Django ORM implementation of IdentityDirectory."""

    def _users(self):
        return get_user_model().objects.select_related("profile")

    def _to_domain(self, user) -> Identity:
        """
        Convert a Django user to an Identity.

        Args:
            user: Django user instance

        Returns:
            Identity read model
        """
        profile = getattr(user, "profile", None)
        return Identity(
            id=user.pk,
            email=user.email,
            is_admin=bool(profile and profile.is_admin),
            channel_identifier=profile.channel_identifier if profile else "",
            created_at=user.date_joined,
            last_login=user.last_login,
        )

    @sync_to_async
    @translate_database_errors
    def find_by_id(self, identity_id) -> Optional[Identity]:
        """Find an identity by id; ids that are not integers never match."""
        pk = _parse_id(identity_id)
        if pk is None:
            return None
        user = self._users().filter(pk=pk).first()
        return self._to_domain(user) if user else None

    @sync_to_async
    @translate_database_errors
    def find_by_email(self, email: str) -> Optional[Identity]:
        """Find an identity by email, case-insensitively."""
        email = normalize_email(email)
        if not email:
            return None
        user = self._users().filter(email__iexact=email).order_by("pk").first()
        return self._to_domain(user) if user else None

    @sync_to_async
    @translate_database_errors
    def list_page(self, limit: int) -> List[Identity]:
        """Return up to ``limit`` identities, newest first."""
        users = self._users().order_by("-date_joined", "-pk")[:limit]
        return [self._to_domain(user) for user in users]

    @sync_to_async
    @translate_database_errors
    def list_channel_identifiers(self) -> List[str]:
        """Return non-empty channel handles linked to profiles."""
        handles = (
            Profile.objects.exclude(channel_identifier="")
            .order_by("pk")
            .values_list("channel_identifier", flat=True)
        )
        return list(handles)

    @sync_to_async
    @translate_database_errors
    def delete_identity(self, identity_id) -> bool:
        """Delete the profile and the auth user together."""
        pk = _parse_id(identity_id)
        if pk is None:
            return False
        with transaction.atomic():
            Profile.objects.filter(user_id=pk).delete()
            deleted, _ = get_user_model().objects.filter(pk=pk).delete()
        return deleted > 0
