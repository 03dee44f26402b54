"""
Model registration for the accounts app.
"""
from accounts.infrastructure.models import BetaSignup, Profile, TokenUsage  # noqa: F401
