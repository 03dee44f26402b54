"""
Beta signup handlers.

Handle joining the beta list and admin approval of a signup.
"""

import logging

from django.utils import timezone

from accounts.application.commands.approve_beta_signup import ApproveBetaSignupCommand
from accounts.application.commands.submit_beta_signup import SubmitBetaSignupCommand
from accounts.application.dto.account_dto import BetaSignupDTO
from accounts.domain.beta_signup import BetaSignup
from accounts.domain.events import BetaSignupApproved, BetaSignupSubmitted
from accounts.ports.beta_signup_repository import BetaSignupRepository
from core.domain.exceptions import AdminRequiredError, BetaSignupNotFoundError, DuplicateSignupError
from core.infrastructure.events import event_bus
from licenses.application.commands.issue_from_approval import IssueFromApprovalCommand
from licenses.application.handlers.issue_license_handler import IssueFromApprovalHandler

logger = logging.getLogger(__name__)


class SubmitBetaSignupHandler:
    """Handler for SubmitBetaSignupCommand."""

    def __init__(self, beta_signup_repository: BetaSignupRepository):
        """Initialize handler with repository."""
        self.beta_signup_repository = beta_signup_repository

    async def handle(self, command: SubmitBetaSignupCommand) -> BetaSignupDTO:
        """
        Handle submit beta signup command.

        Args:
            command: SubmitBetaSignupCommand

        Returns:
            BetaSignupDTO for the pending signup

        Raises:
            ValueError: If a required field is missing or the email is malformed
            DuplicateSignupError: If the email is already on the list
        """
        signup = BetaSignup.create(
            name=command.name,
            email=command.email,
            channel_identifier=command.channel_identifier,
            content_type=command.content_type,
            message=command.message,
            now=timezone.now(),
        )
        if await self.beta_signup_repository.find_by_email(signup.email):
            raise DuplicateSignupError()

        signup = await self.beta_signup_repository.create(signup)
        logger.info("Beta signup %s received for %s", signup.id, signup.email)
        await event_bus.publish(BetaSignupSubmitted(signup_id=signup.id, email=signup.email))
        return BetaSignupDTO.from_entity(signup)


class ApproveBetaSignupHandler:
    """
    Handler for ApproveBetaSignupCommand.

    Every approval issues a new license, including re-approvals.
    """

    def __init__(
        self,
        beta_signup_repository: BetaSignupRepository,
        issue_handler: IssueFromApprovalHandler,
    ):
        """Initialize handler with repository and the issuing handler."""
        self.beta_signup_repository = beta_signup_repository
        self.issue_handler = issue_handler

    async def handle(self, command: ApproveBetaSignupCommand) -> BetaSignupDTO:
        """
        Handle approve beta signup command.

        Args:
            command: ApproveBetaSignupCommand

        Returns:
            BetaSignupDTO stamped with the issued key

        Raises:
            AdminRequiredError: If the requester is not an admin
            BetaSignupNotFoundError: If the signup does not exist
        """
        if not command.requester_is_admin:
            raise AdminRequiredError()

        signup = await self.beta_signup_repository.find_by_id(command.signup_id)
        if signup is None:
            raise BetaSignupNotFoundError()

        issued = await self.issue_handler.handle(
            IssueFromApprovalCommand(
                email=signup.email, name=signup.name, expires_at=command.expires_at
            )
        )
        approved = signup.approve(issued.license.key, now=timezone.now())
        if not await self.beta_signup_repository.mark_approved(
            approved.id, approved.license_key, approved.approved_at
        ):
            # Deleted while the key was being issued; the license stands.
            logger.warning("Beta signup %s vanished during approval", signup.id)
            raise BetaSignupNotFoundError()

        logger.info("Beta signup %s approved with license %s", signup.id, approved.license_key)
        await event_bus.publish(
            BetaSignupApproved(
                signup_id=signup.id, email=signup.email, license_key=approved.license_key
            )
        )
        return BetaSignupDTO.from_entity(approved)
