"""
IssueFromPurchaseCommand.

Command to issue a license for a completed purchase.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class IssueFromPurchaseCommand:
    """
    Command carrying a verified "purchase completed" event.

    The payment reference is the idempotency key: the same purchase
    delivered twice yields the same license.
    """

    reference: str
    email: Optional[str]
    custom_expiry: Optional[datetime] = None
    customer_reference: Optional[str] = None
    subscription_reference: Optional[str] = None
