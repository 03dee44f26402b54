"""
API permissions.
"""

import hmac
import logging

from rest_framework.permissions import BasePermission

from core.config import LicensingConfig

logger = logging.getLogger(__name__)

PURCHASE_FEED_HEADER = "X-Purchase-Feed-Token"


def is_licensing_admin(user) -> bool:
    """True if the user's profile carries the admin flag."""
    if not user or not user.is_authenticated:
        return False
    profile = getattr(user, "profile", None)
    return bool(profile and profile.is_admin)


class HasPurchaseFeedToken(BasePermission):
    """
    Allows the trusted purchase feed only.

    The feed presents a shared secret in a header; with no secret
    configured every request is refused.
    """

    message = "Invalid purchase feed token."

    def has_permission(self, request, view):
        expected = LicensingConfig.from_settings().purchase_feed_token
        presented = request.headers.get(PURCHASE_FEED_HEADER, "")
        if not expected or not presented:
            return False
        if not hmac.compare_digest(presented.encode(), expected.encode()):
            logger.warning("Rejected purchase feed request with a wrong token")
            return False
        return True
