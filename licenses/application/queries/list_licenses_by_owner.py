"""
ListLicensesByOwnerQuery.

Query to list the licenses held by the calling owner.
"""

from dataclasses import dataclass


@dataclass
class ListLicensesByOwnerQuery:
    """Query to list licenses by owner email."""

    owner_email: str
