"""
IssueFromApprovalCommand.

Command to issue a license for an admin-approved beta tester.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class IssueFromApprovalCommand:
    """Command to issue a license after an approval decision."""

    email: str
    name: str = ""
    expires_at: Optional[datetime] = None  # Config default when omitted
