"""
Revocation progress value object.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

# Order matters: usage rows are found through license keys, so they go
# before the licenses themselves.
USAGE_BY_LICENSE = "usage_by_license"
USAGE_BY_CHANNEL = "usage_by_channel"
BETA_SIGNUPS = "beta_signups"
LICENSES = "licenses"
IDENTITY = "identity"

REVOCATION_STEPS = (USAGE_BY_LICENSE, USAGE_BY_CHANNEL, BETA_SIGNUPS, LICENSES, IDENTITY)


@dataclass
class RevocationProgress:
    """What a revocation has removed so far."""

    identity_id: int
    email: str
    license_keys: List[str] = field(default_factory=list)
    completed_steps: List[str] = field(default_factory=list)
    deleted_usage_count: int = 0
    deleted_signup_count: int = 0
    deleted_license_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.identity_id,
            "email": self.email,
            "completed_steps": list(self.completed_steps),
            "deleted_license_count": self.deleted_license_count,
            "deleted_usage_count": self.deleted_usage_count,
            "deleted_signup_count": self.deleted_signup_count,
        }
