"""
Licensing configuration.

Settings are read once into an explicit LicensingConfig object that is
handed to each handler at construction, instead of handlers reaching
into process-wide settings.
"""
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from django.conf import settings


@dataclass(frozen=True)
class LicensingConfig:
    """Tunables for issuance, listing and the purchase feed."""

    purchase_grace: timedelta = timedelta(hours=24)
    approval_default_ttl: Optional[timedelta] = timedelta(days=30)
    key_generation_attempts: int = 5
    identity_list_default_limit: int = 200
    identity_list_max_limit: int = 500
    purchase_feed_token: str = ""

    def __post_init__(self):
        if self.key_generation_attempts < 1:
            raise ValueError("key_generation_attempts must be at least 1")
        if not 1 <= self.identity_list_default_limit <= self.identity_list_max_limit:
            raise ValueError("identity_list_default_limit must be within 1..max")

    @classmethod
    def from_settings(cls) -> "LicensingConfig":
        """Build the config from the LICENSING Django setting."""
        raw = getattr(settings, "LICENSING", {})
        approval_days = raw.get("APPROVAL_DEFAULT_DAYS", 30)
        return cls(
            purchase_grace=timedelta(hours=raw.get("PURCHASE_GRACE_HOURS", 24)),
            approval_default_ttl=(
                timedelta(days=approval_days) if approval_days is not None else None
            ),
            key_generation_attempts=raw.get("KEY_GENERATION_ATTEMPTS", 5),
            identity_list_default_limit=raw.get("IDENTITY_LIST_DEFAULT_LIMIT", 200),
            identity_list_max_limit=raw.get("IDENTITY_LIST_MAX_LIMIT", 500),
            purchase_feed_token=raw.get("PURCHASE_FEED_TOKEN", ""),
        )

    def clamp_list_limit(self, requested) -> int:
        """Clamp a requested listing limit into 1..max, defaulting bad input."""
        try:
            limit = int(requested)
        except (TypeError, ValueError):
            return self.identity_list_default_limit
        if limit == 0:
            return self.identity_list_default_limit
        return max(1, min(self.identity_list_max_limit, limit))
