"""
ResetLicenseHandler.

Handler for an owner resetting their license's machine binding.
"""

import logging

from activations.application.commands.reset_license import ResetLicenseCommand
from activations.application.dto.activation_dto import ResetLicenseResponseDTO
from activations.domain.events import LicenseBindingReset
from activations.domain.services import BindingReset
from core.domain.value_objects import clean_identifier, normalize_email
from core.infrastructure.events import event_bus
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ResetLicenseHandler:
    """Handler for ResetLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ResetLicenseCommand) -> ResetLicenseResponseDTO:
        """
        Handle reset license command.

        Args:
            command: ResetLicenseCommand

        Returns:
            ResetLicenseResponseDTO

        Raises:
            NotOwnedError: If the key is absent or belongs to someone else
        """
        await BindingReset.reset_by_owner(
            self.license_repository, command.license_key, command.requesting_email
        )

        key = clean_identifier(command.license_key)
        email = normalize_email(command.requesting_email)
        logger.info("License %s reset by owner %s", key, email)
        await event_bus.publish(LicenseBindingReset(license_key=key, owner_email=email))
        return ResetLicenseResponseDTO(license_key=key)
