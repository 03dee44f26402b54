"""
ResetLicenseCommand.

Command an owner issues to free a license for another machine.
"""

from dataclasses import dataclass


@dataclass
class ResetLicenseCommand:
    """Command to reset a license's machine binding."""

    license_key: str
    requesting_email: str
