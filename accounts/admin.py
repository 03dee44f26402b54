"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import BetaSignup, Profile, TokenUsage


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin interface for Profile model."""

    list_display = ["user", "is_admin", "channel_identifier"]
    list_filter = ["is_admin"]
    search_fields = ["user__email", "channel_identifier"]
    list_select_related = ["user"]


@admin.register(BetaSignup)
class BetaSignupAdmin(admin.ModelAdmin):
    """Admin interface for BetaSignup model."""

    list_display = ["email", "name", "channel_identifier", "status", "license_key", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["email", "name", "channel_identifier"]
    readonly_fields = ["created_at", "approved_at", "license_key"]


@admin.register(TokenUsage)
class TokenUsageAdmin(admin.ModelAdmin):
    """Admin interface for TokenUsage model."""

    list_display = ["license_key", "channel", "username", "tokens_used", "created_at"]
    search_fields = ["license_key", "channel", "username"]
    readonly_fields = ["created_at"]
