"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.

Every operation is atomic for a single record; no operation spans
several licenses in one transaction.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from licenses.domain.license import License
from licenses.domain.purchase import Purchase

# Fields a partial update may change
UPDATABLE_FIELDS = frozenset({"owner_email", "status", "machine_id", "expires_at", "last_seen"})


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[License]:
        """
        Find a license by key.

        Args:
            key: License key string

        Returns:
            License entity or None if not found
        """
        pass

    @abstractmethod
    async def create(self, license: License, purchase: Optional[Purchase] = None) -> License:
        """
        Insert a new license, together with its purchase record if given.

        Args:
            license: License entity to insert
            purchase: Purchase record written in the same transaction

        Returns:
            Persisted license entity

        Raises:
            LicenseKeyConflictError: If the key already exists
            DuplicatePurchaseReferenceError: If the purchase reference exists
        """
        pass

    @abstractmethod
    async def update(self, key: str, /, **fields) -> bool:
        """
        Apply a partial update.

        Returns:
            True if a license with this key existed

        Raises:
            ValueError: If a field outside UPDATABLE_FIELDS is given
        """
        pass

    @abstractmethod
    async def bind_machine(self, key: str, machine_id: str, seen_at: datetime) -> bool:
        """
        Bind a machine only if the license is still unbound.

        The "still unbound" condition is checked in the same write, so of
        two racing first activations exactly one gets True.
        """
        pass

    @abstractmethod
    async def touch(self, key: str, seen_at: datetime) -> bool:
        """Refresh last_seen. Returns False if the license is gone."""
        pass

    @abstractmethod
    async def reset_binding(self, key: str, owner_email: str) -> bool:
        """
        Clear the binding and reactivate, only for the matching owner.

        Returns:
            False when the key is absent or owned by someone else
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a license. Deleting an absent key is a no-op."""
        pass

    @abstractmethod
    async def delete_by_owner(self, email: str) -> int:
        """Delete every license of an owner and return how many went."""
        pass

    @abstractmethod
    async def find_by_owner(self, email: str) -> List[License]:
        """
        Find all licenses of an owner.

        Args:
            email: Normalized owner email

        Returns:
            List of License entities, newest first
        """
        pass

    @abstractmethod
    async def find_by_reference(self, reference: str) -> Optional[License]:
        """Find the license issued for a purchase reference."""
        pass

    @abstractmethod
    async def count_by_owners(self, emails: Iterable[str]) -> Dict[str, Tuple[int, int]]:
        """
        Count licenses per owner.

        Returns:
            Mapping of email to (total, active) counts
        """
        pass
