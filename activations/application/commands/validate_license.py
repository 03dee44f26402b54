"""
ValidateLicenseCommand.

Command to validate a license key, binding it to the requesting machine
on first successful use.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ValidateLicenseCommand:
    """Command to validate a license for a machine."""

    license_key: str
    machine_id: Optional[str] = None
