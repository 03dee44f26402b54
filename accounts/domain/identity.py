"""
Identity read model.

An identity is an authenticated user as the licensing service sees it.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.value_objects import normalize_email


@dataclass(frozen=True)
class Identity:
    """Authenticated user known to the directory."""

    id: int
    email: str
    is_admin: bool = False
    channel_identifier: str = ""
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "email", normalize_email(self.email))
        object.__setattr__(self, "channel_identifier", (self.channel_identifier or "").strip())

    def is_same_as(self, other_id) -> bool:
        """Compare against an id that may arrive as a string."""
        return other_id is not None and str(self.id) == str(other_id).strip()
