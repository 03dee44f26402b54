"""
Purchase repository port (interface).

Purchase records are written by the license repository together with
their license; this port only reads them.
"""
from abc import ABC, abstractmethod
from typing import Optional

from licenses.domain.purchase import Purchase


class PurchaseRepository(ABC):
    """Abstract read-side repository for Purchase records."""

    @abstractmethod
    async def find_by_reference(self, reference: str) -> Optional[Purchase]:
        """
        Find a purchase by payment reference.

        Args:
            reference: Payment session reference

        Returns:
            Purchase entity or None if not found
        """
        pass

    @abstractmethod
    async def exists(self, reference: str) -> bool:
        """Check whether a purchase reference was recorded."""
        pass
