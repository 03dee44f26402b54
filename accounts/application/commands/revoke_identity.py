"""
RevokeIdentityCommand.

Command an admin issues to remove a user and everything they own.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RevokeIdentityCommand:
    """Command to revoke an identity by id or email."""

    requester_id: int
    requester_is_admin: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
