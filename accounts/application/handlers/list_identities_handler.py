"""
ListIdentitiesHandler.

Handler for the admin user listing.
"""

from typing import List

from accounts.application.dto.account_dto import IdentityDTO
from accounts.application.queries.list_identities import ListIdentitiesQuery
from accounts.ports.beta_signup_repository import BetaSignupRepository
from accounts.ports.identity_directory import IdentityDirectory
from core.config import LicensingConfig
from core.domain.exceptions import AdminRequiredError
from licenses.ports.license_repository import LicenseRepository


class ListIdentitiesHandler:
    """Handler for ListIdentitiesQuery."""

    def __init__(
        self,
        identity_directory: IdentityDirectory,
        license_repository: LicenseRepository,
        beta_signup_repository: BetaSignupRepository,
        config: LicensingConfig,
    ):
        """Initialize handler with repositories and configuration."""
        self.identity_directory = identity_directory
        self.license_repository = license_repository
        self.beta_signup_repository = beta_signup_repository
        self.config = config

    async def handle(self, query: ListIdentitiesQuery) -> List[IdentityDTO]:
        """
        Handle list identities query.

        Args:
            query: ListIdentitiesQuery

        Returns:
            List of IdentityDTO with license and beta stats

        Raises:
            AdminRequiredError: If the requester is not an admin
        """
        if not query.requester_is_admin:
            raise AdminRequiredError()

        limit = self.config.clamp_list_limit(query.limit)
        identities = await self.identity_directory.list_page(limit)
        emails = [identity.email for identity in identities if identity.email]

        license_stats = await self.license_repository.count_by_owners(emails)
        beta_status = await self.beta_signup_repository.status_by_emails(emails)

        rows = []
        for identity in identities:
            total, active = license_stats.get(identity.email, (0, 0))
            rows.append(
                IdentityDTO(
                    id=identity.id,
                    email=identity.email,
                    created_at=identity.created_at,
                    last_login=identity.last_login,
                    is_admin=identity.is_admin,
                    channel_identifier=identity.channel_identifier,
                    license_count=total,
                    active_license_count=active,
                    beta_status=beta_status.get(identity.email),
                )
            )
        return rows
