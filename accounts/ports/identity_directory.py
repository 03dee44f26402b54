"""
Identity directory port (interface).

The directory owns authentication; this service only reads identities
from it and removes them on revocation.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from accounts.domain.identity import Identity


class IdentityDirectory(ABC):
    """Abstract access to the identity store."""

    @abstractmethod
    async def find_by_id(self, identity_id) -> Optional[Identity]:
        """
        Find an identity by id.

        Args:
            identity_id: Identity id, possibly as a string

        Returns:
            Identity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Identity]:
        """Find an identity by normalized email."""
        pass

    @abstractmethod
    async def list_page(self, limit: int) -> List[Identity]:
        """Return the first page of identities, newest first."""
        pass

    @abstractmethod
    async def list_channel_identifiers(self) -> List[str]:
        """Return every non-empty channel handle linked to a profile."""
        pass

    @abstractmethod
    async def delete_identity(self, identity_id) -> bool:
        """
        Remove an identity and its profile.

        Deleting an identity that is already gone is a no-op.

        Returns:
            True if something was deleted
        """
        pass
