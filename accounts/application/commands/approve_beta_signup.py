"""
ApproveBetaSignupCommand.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ApproveBetaSignupCommand:
    """Command to approve a signup and issue its license."""

    signup_id: int
    requester_is_admin: bool
    expires_at: Optional[datetime] = None
