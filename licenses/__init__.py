"""
Licenses module - License records and issuance.

This module handles:
- License entity and key generation
- Purchase records and idempotent purchase issuance
- Issuance on beta approval
- Owner license listing
"""
