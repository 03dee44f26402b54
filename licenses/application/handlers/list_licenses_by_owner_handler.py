"""
ListLicensesByOwnerHandler.

Handler for listing the licenses of the calling owner.
"""

from typing import List

from licenses.application.dto.license_dto import LicenseDTO
from licenses.application.queries.list_licenses_by_owner import ListLicensesByOwnerQuery
from licenses.ports.license_repository import LicenseRepository


class ListLicensesByOwnerHandler:
    """Handler for ListLicensesByOwnerQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesByOwnerQuery) -> List[LicenseDTO]:
        """
        Handle list licenses by owner query.

        Args:
            query: ListLicensesByOwnerQuery

        Returns:
            List of LicenseDTO
        """
        licenses = await self.license_repository.find_by_owner(query.owner_email)
        return [LicenseDTO.from_entity(license) for license in licenses]
