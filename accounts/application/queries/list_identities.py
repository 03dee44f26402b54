"""
ListIdentitiesQuery.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ListIdentitiesQuery:
    """Query for the admin user listing. ``limit`` is raw request input."""

    requester_is_admin: bool
    limit: Any = None
