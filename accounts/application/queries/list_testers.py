"""
ListTestersQuery.
"""

from dataclasses import dataclass


@dataclass
class ListTestersQuery:
    """Query for the public tester roster."""
