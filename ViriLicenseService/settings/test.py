"""
Test settings for ViriLicenseService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

# File-backed SQLite so async tests, whose ORM calls run in worker
# threads, see the same database as the test itself.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
        "TEST": {
            "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
        },
    }
}

LICENSING = {
    **LICENSING,  # noqa: F405
    "PURCHASE_FEED_TOKEN": "test-purchase-feed-token",
}

# Password hashers for faster tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable logging during tests
LOGGING_CONFIG = None
