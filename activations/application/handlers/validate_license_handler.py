"""
ValidateLicenseHandler.

Handler for validating a license key from a client application.
"""

import logging

from django.utils import timezone

from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.dto.activation_dto import ValidationResponseDTO
from activations.domain.events import LicenseBound, LicenseValidated
from activations.domain.services import ActivationEngine
from core.domain.value_objects import clean_identifier
from core.infrastructure.events import event_bus
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResponseDTO:
        """
        Handle validate license command.

        Rejections are returned, not raised.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResponseDTO

        Raises:
            UpstreamUnavailableError: If the license store is unreachable
        """
        key = clean_identifier(command.license_key) or ""
        result = await ActivationEngine.validate(
            self.license_repository,
            key,
            machine_id=command.machine_id,
            now=timezone.now(),
        )

        logger.info("Validation of %s: %s", key or "<empty>", result.reason.value)
        await event_bus.publish(LicenseValidated(license_key=key, reason=result.reason.value))
        if result.newly_bound:
            await event_bus.publish(
                LicenseBound(license_key=key, machine_id=clean_identifier(command.machine_id))
            )

        return ValidationResponseDTO.from_result(result)
