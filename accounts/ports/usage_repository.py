"""
Usage repository port (interface).

Usage records are written by the client applications; the licensing
service only ever deletes them.
"""
from abc import ABC, abstractmethod
from typing import Iterable


class UsageRepository(ABC):
    """Abstract repository for token usage records."""

    @abstractmethod
    async def delete_by_license_keys(self, license_keys: Iterable[str]) -> int:
        """
        Delete usage recorded against any of the given keys.

        Returns:
            Number of records deleted
        """
        pass

    @abstractmethod
    async def delete_by_channel_identifier(self, channel_identifier: str) -> int:
        """
        Delete usage recorded for a channel or by a user of that handle.

        Returns:
            Number of records deleted
        """
        pass
