"""
RevokeIdentityHandler.

Handler for an admin removing a user and all of their data.
"""

import logging

from accounts.application.commands.revoke_identity import RevokeIdentityCommand
from accounts.application.dto.account_dto import RevocationResultDTO
from accounts.domain.events import IdentityRevoked, RevocationStopped
from accounts.domain.identity import Identity
from accounts.domain.services import RevocationCoordinator
from accounts.ports.beta_signup_repository import BetaSignupRepository
from accounts.ports.identity_directory import IdentityDirectory
from accounts.ports.usage_repository import UsageRepository
from core.domain.exceptions import (
    AdminRequiredError,
    IdentityNotFoundError,
    InvalidRevocationTargetError,
    RevocationIncompleteError,
    SelfRevocationError,
)
from core.domain.value_objects import clean_identifier, normalize_email
from core.infrastructure.events import event_bus
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RevokeIdentityHandler:
    """Handler for RevokeIdentityCommand."""

    def __init__(
        self,
        identity_directory: IdentityDirectory,
        license_repository: LicenseRepository,
        usage_repository: UsageRepository,
        beta_signup_repository: BetaSignupRepository,
    ):
        """Initialize handler with repositories."""
        self.identity_directory = identity_directory
        self.coordinator = RevocationCoordinator(
            identity_directory=identity_directory,
            license_repository=license_repository,
            usage_repository=usage_repository,
            beta_signup_repository=beta_signup_repository,
        )

    async def handle(self, command: RevokeIdentityCommand) -> RevocationResultDTO:
        """
        Handle revoke identity command.

        Args:
            command: RevokeIdentityCommand

        Returns:
            RevocationResultDTO

        Raises:
            AdminRequiredError: If the requester is not an admin
            InvalidRevocationTargetError: If neither user_id nor email was given
            IdentityNotFoundError: If the target does not exist
            SelfRevocationError: If the admin targets their own account
            RevocationIncompleteError: If a step failed partway
        """
        if not command.requester_is_admin:
            raise AdminRequiredError()

        target = await self._resolve_target(command)
        if target.is_same_as(command.requester_id):
            raise SelfRevocationError()

        logger.info(
            "Admin %s revoking identity %s (%s)", command.requester_id, target.id, target.email
        )
        try:
            progress = await self.coordinator.revoke(target)
        except RevocationIncompleteError as exc:
            await event_bus.publish(
                RevocationStopped(identity_id=target.id, failed_step=exc.failed_step)
            )
            raise

        await event_bus.publish(
            IdentityRevoked(
                identity_id=target.id,
                email=target.email,
                revoked_by=command.requester_id,
                license_count=progress.deleted_license_count,
            )
        )
        return RevocationResultDTO(
            deleted_user_id=target.id,
            deleted_email=target.email,
            deleted_license_count=progress.deleted_license_count,
            deleted_usage_count=progress.deleted_usage_count,
            deleted_signup_count=progress.deleted_signup_count,
        )

    async def _resolve_target(self, command: RevokeIdentityCommand) -> Identity:
        user_id = clean_identifier(None if command.user_id is None else str(command.user_id))
        email = normalize_email(command.email)

        if user_id:
            target = await self.identity_directory.find_by_id(user_id)
        elif email:
            target = await self.identity_directory.find_by_email(email)
        else:
            raise InvalidRevocationTargetError()

        if target is None:
            raise IdentityNotFoundError()
        return target
