"""
Account DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from accounts.domain.beta_signup import BetaSignup
from accounts.domain.services import Tester


@dataclass
class RevocationResultDTO:
    """DTO for a completed revocation."""

    deleted_user_id: int
    deleted_email: str
    deleted_license_count: int
    deleted_usage_count: int
    deleted_signup_count: int


@dataclass
class IdentityDTO:
    """DTO for one row of the admin user listing."""

    id: int
    email: str
    created_at: Optional[datetime]
    last_login: Optional[datetime]
    is_admin: bool
    channel_identifier: str
    license_count: int
    active_license_count: int
    beta_status: Optional[str]


@dataclass
class BetaSignupDTO:
    """DTO for a beta signup."""

    id: int
    name: str
    email: str
    channel_identifier: str
    status: str
    license_key: Optional[str]
    created_at: datetime
    approved_at: Optional[datetime]

    @classmethod
    def from_entity(cls, signup: BetaSignup) -> "BetaSignupDTO":
        return cls(
            id=signup.id,
            name=signup.name,
            email=signup.email,
            channel_identifier=signup.channel_identifier,
            status=signup.status.value,
            license_key=signup.license_key,
            created_at=signup.created_at,
            approved_at=signup.approved_at,
        )


@dataclass
class TesterRosterDTO:
    """DTO for the public tester roster."""

    testers: List[Dict[str, Any]]
    total: int

    @classmethod
    def from_testers(cls, testers: List[Tester]) -> "TesterRosterDTO":
        rows = [{"channel": t.channel, "display": t.display} for t in testers]
        return cls(testers=rows, total=len(rows))
