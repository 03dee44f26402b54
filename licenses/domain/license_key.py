"""
License key generation.

Keys look like ``VIRI-XXXX-XXXX-XXXX-XXXX``. Each character comes from one
random byte mapped onto an alphabet without I, O, 0 and 1, so keys can be
typed by hand without confusion. The mapping must stay stable: clients
and existing keys depend on the exact format.
"""

import secrets
from typing import Optional

KEY_PREFIX = "VIRI"
KEY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
KEY_BYTES = 16
GROUP_SIZE = 4

# Longest key the store accepts; generated keys are shorter.
MAX_KEY_LENGTH = 64


def generate_license_key(random_bytes: Optional[bytes] = None) -> str:
    """
    Generate a license key in format: VIRI-XXXX-XXXX-XXXX-XXXX.

    Args:
        random_bytes: Source bytes (16 fresh random bytes if not given)

    Returns:
        Generated license key string
    """
    source = random_bytes if random_bytes is not None else secrets.token_bytes(KEY_BYTES)
    if len(source) != KEY_BYTES:
        raise ValueError(f"License keys are built from exactly {KEY_BYTES} bytes")

    chars = "".join(KEY_ALPHABET[byte % len(KEY_ALPHABET)] for byte in source)
    groups = [chars[i : i + GROUP_SIZE] for i in range(0, len(chars), GROUP_SIZE)]
    return f"{KEY_PREFIX}-{'-'.join(groups)}"
