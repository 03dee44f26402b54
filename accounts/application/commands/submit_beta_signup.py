"""
SubmitBetaSignupCommand.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SubmitBetaSignupCommand:
    """Command to join the beta list."""

    name: str
    email: str
    channel_identifier: str
    content_type: Optional[str] = None
    message: Optional[str] = None
