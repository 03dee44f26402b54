"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from activations.domain.validation import ValidationResult
from core.domain.exceptions import NotOwnedError
from core.domain.value_objects import ValidationReason, clean_identifier, normalize_email
from licenses.domain.license_key import MAX_KEY_LENGTH
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

# One retry after losing the binding race covers a reset landing in between.
BIND_ATTEMPTS = 2


class ActivationEngine:
    """Domain service validating license keys against machines."""

    @staticmethod
    async def validate(
        license_repository: LicenseRepository,
        key: str,
        machine_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        """
        Validate a license key for a requesting machine.

        Checks run in order and the first failure wins: existence,
        status, expiry, machine binding. On success an unbound license is
        bound to the requesting machine (if one was given) with a
        conditional write, and last_seen is refreshed.

        Args:
            license_repository: License repository
            key: License key as typed by the user
            machine_id: Requesting machine, None for an informational check
            now: Validation time (defaults to current UTC time)

        Returns:
            ValidationResult
        """
        key = clean_identifier(key)
        machine_id = clean_identifier(machine_id)
        if not key or len(key) > MAX_KEY_LENGTH:
            return ValidationResult.rejected(ValidationReason.NOT_FOUND)
        now = now or datetime.now(timezone.utc)

        for _ in range(BIND_ATTEMPTS):
            license = await license_repository.find_by_key(key)
            if license is None:
                return ValidationResult.rejected(ValidationReason.NOT_FOUND)

            reason = license.check(machine_id, now)
            if reason is not ValidationReason.VALID:
                return ValidationResult.rejected(reason)

            if not license.should_bind(machine_id):
                await license_repository.touch(key, now)
                return ValidationResult.accepted(license.expires_at)

            if await license_repository.bind_machine(key, machine_id, now):
                logger.info("License %s bound to machine on first activation", key)
                return ValidationResult.accepted(license.expires_at, newly_bound=True)

            logger.info("License %s was bound concurrently; re-checking", key)

        return ValidationResult.rejected(ValidationReason.MACHINE_MISMATCH)


class BindingReset:
    """Domain service for owner-initiated resets."""

    @staticmethod
    async def reset_by_owner(
        license_repository: LicenseRepository,
        key: str,
        requesting_email: str,
    ) -> None:
        """
        Clear a license's machine binding on behalf of its owner.

        The license is also reactivated and its last_seen cleared.

        Args:
            license_repository: License repository
            key: License key
            requesting_email: Email of the caller

        Raises:
            NotOwnedError: If the key is absent or owned by someone else
        """
        key = clean_identifier(key)
        email = normalize_email(requesting_email)
        if not key or not email:
            raise NotOwnedError()
        if not await license_repository.reset_binding(key, email):
            raise NotOwnedError()
