"""
Django implementation of BetaSignupRepository port.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from accounts.domain.beta_signup import BetaSignup
from accounts.infrastructure.models import BetaSignup as BetaSignupModel
from accounts.ports.beta_signup_repository import BetaSignupRepository
from core.domain.exceptions import DuplicateSignupError
from core.domain.value_objects import SignupStatus, normalize_email
from core.infrastructure.database import translate_database_errors


class DjangoBetaSignupRepository(BetaSignupRepository):
    """Django ORM implementation of BetaSignupRepository."""

    def _to_domain(self, model: BetaSignupModel) -> BetaSignup:
        """Convert Django model to domain entity."""
        status = (
            SignupStatus.APPROVED
            if model.status == SignupStatus.APPROVED.value
            else SignupStatus.PENDING
        )
        return BetaSignup(
            id=model.pk,
            name=model.name,
            email=model.email,
            channel_identifier=model.channel_identifier,
            content_type=model.content_type,
            message=model.message,
            status=status,
            license_key=model.license_key,
            created_at=model.created_at,
            approved_at=model.approved_at,
        )

    @sync_to_async
    @translate_database_errors
    def find_by_id(self, signup_id: int) -> Optional[BetaSignup]:
        """Find a signup by id."""
        model = BetaSignupModel.objects.filter(pk=signup_id).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    @translate_database_errors
    def find_by_email(self, email: str) -> Optional[BetaSignup]:
        """Find a signup by email."""
        email = normalize_email(email)
        if not email:
            return None
        model = BetaSignupModel.objects.filter(email=email).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    @translate_database_errors
    def create(self, signup: BetaSignup) -> BetaSignup:
        """
        Insert a signup.

        Args:
            signup: BetaSignup entity

        Returns:
            Persisted BetaSignup with its id
        """
        try:
            with transaction.atomic():
                model = BetaSignupModel.objects.create(
                    name=signup.name,
                    email=signup.email,
                    channel_identifier=signup.channel_identifier,
                    content_type=signup.content_type,
                    message=signup.message,
                    status=signup.status.value,
                    license_key=signup.license_key,
                    created_at=signup.created_at,
                    approved_at=signup.approved_at,
                )
        except IntegrityError as exc:
            raise DuplicateSignupError() from exc
        return self._to_domain(model)

    @sync_to_async
    @translate_database_errors
    def mark_approved(self, signup_id: int, license_key: str, approved_at: datetime) -> bool:
        """Stamp a signup as approved with its key."""
        updated = BetaSignupModel.objects.filter(pk=signup_id).update(
            status=SignupStatus.APPROVED.value,
            license_key=license_key,
            approved_at=approved_at,
        )
        return updated > 0

    @sync_to_async
    @translate_database_errors
    def delete_by_email(self, email: str) -> int:
        """Delete signups for an email."""
        email = normalize_email(email)
        if not email:
            return 0
        deleted, _ = BetaSignupModel.objects.filter(email=email).delete()
        return deleted

    @sync_to_async
    @translate_database_errors
    def list_approved(self) -> List[BetaSignup]:
        """Return approved signups, oldest first."""
        models = BetaSignupModel.objects.filter(status=SignupStatus.APPROVED.value).order_by(
            "created_at", "pk"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @translate_database_errors
    def status_by_emails(self, emails: Iterable[str]) -> Dict[str, str]:
        """Map emails to signup status."""
        wanted = {normalize_email(email) for email in emails} - {""}
        if not wanted:
            return {}
        rows = BetaSignupModel.objects.filter(email__in=wanted).values_list("email", "status")
        return {email: status for email, status in rows}
