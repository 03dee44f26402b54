"""
Development settings for ViriLicenseService.
"""

import os

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Purchase feed secret for local runs
LICENSING["PURCHASE_FEED_TOKEN"] = os.environ.get(  # noqa: F405
    "PURCHASE_FEED_TOKEN", "dev-purchase-feed-token"
)

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
