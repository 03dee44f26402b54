"""
Beta signup repository port (interface).
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from accounts.domain.beta_signup import BetaSignup


class BetaSignupRepository(ABC):
    """Abstract repository for BetaSignup entities."""

    @abstractmethod
    async def find_by_id(self, signup_id: int) -> Optional[BetaSignup]:
        """Find a signup by id."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[BetaSignup]:
        """Find a signup by normalized email."""
        pass

    @abstractmethod
    async def create(self, signup: BetaSignup) -> BetaSignup:
        """
        Insert a new signup.

        Args:
            signup: Signup entity without id

        Returns:
            Persisted signup with its id

        Raises:
            DuplicateSignupError: If the email is already on the list
        """
        pass

    @abstractmethod
    async def mark_approved(
        self, signup_id: int, license_key: str, approved_at: datetime
    ) -> bool:
        """Record approval and the issued key. Returns False if the signup is gone."""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete every signup for an email and return how many went."""
        pass

    @abstractmethod
    async def list_approved(self) -> List[BetaSignup]:
        """Return approved signups, oldest first."""
        pass

    @abstractmethod
    async def status_by_emails(self, emails: Iterable[str]) -> Dict[str, str]:
        """Map each email that has a signup to its status."""
        pass
