"""
Accounts module - Identities, beta testers and administration.

This module handles:
- Identity directory over Django auth users and their profiles
- Beta signups and their approval
- Admin revocation of an identity and everything it owns
- Public tester roster
"""
