"""
ListTestersHandler.

Handler for the public tester roster.
"""

from accounts.application.dto.account_dto import TesterRosterDTO
from accounts.application.queries.list_testers import ListTestersQuery
from accounts.domain.services import TesterRoster
from accounts.ports.beta_signup_repository import BetaSignupRepository
from accounts.ports.identity_directory import IdentityDirectory


class ListTestersHandler:
    """Handler for ListTestersQuery."""

    def __init__(
        self,
        identity_directory: IdentityDirectory,
        beta_signup_repository: BetaSignupRepository,
    ):
        """Initialize handler with repositories."""
        self.identity_directory = identity_directory
        self.beta_signup_repository = beta_signup_repository

    async def handle(self, query: ListTestersQuery) -> TesterRosterDTO:
        """
        Handle list testers query.

        Args:
            query: ListTestersQuery

        Returns:
            TesterRosterDTO
        """
        handles = await self.identity_directory.list_channel_identifiers()
        signups = await self.beta_signup_repository.list_approved()
        return TesterRosterDTO.from_testers(TesterRoster.build(handles, signups))
