"""
Account models.

This is the infrastructure layer model for accounts.
Domain entities are in accounts.domain.
"""
from django.conf import settings
from django.db import models


class Profile(models.Model):
    """Licensing-specific attributes of an auth user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    is_admin = models.BooleanField(default=False)
    channel_identifier = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        app_label = "accounts"
        db_table = "profiles"

    def __str__(self):
        return f"Profile({self.user_id})"


class TokenUsage(models.Model):
    """Usage reported by a client application, keyed by license."""

    license_key = models.CharField(max_length=64, db_index=True)
    channel = models.CharField(max_length=255, blank=True, default="", db_index=True)
    username = models.CharField(max_length=255, blank=True, default="", db_index=True)
    tokens_used = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "accounts"
        db_table = "token_usage"

    def __str__(self):
        return f"{self.license_key}: {self.tokens_used}"


class BetaSignup(models.Model):
    """Request to join the beta."""

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("approved", "Approved"),
    ]

    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    channel_identifier = models.CharField(max_length=255)
    content_type = models.CharField(max_length=100, null=True, blank=True)
    message = models.TextField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending")
    license_key = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField()
    approved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        app_label = "accounts"
        db_table = "beta_signups"
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.email} ({self.status})"
