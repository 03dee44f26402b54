"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from licenses.infrastructure.models import License, Purchase


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "key",
        "owner_email",
        "status_display",
        "bound",
        "expires_at",
        "last_seen",
        "created_at",
    ]
    list_filter = ["status", "expires_at", "created_at"]
    search_fields = ["key", "owner_email", "machine_id"]
    readonly_fields = ["key", "created_at", "updated_at", "last_seen"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("key", "owner_email", "status"),
            },
        ),
        (
            "Binding",
            {
                "fields": ("machine_id", "last_seen"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expires_at",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding; expiry is derived, not stored."""
        if obj.expires_at and obj.expires_at < timezone.now():
            label, color = "expired", "gray"
        elif obj.status == "active":
            label, color = "active", "green"
        else:
            label, color = obj.status or "inactive", "red"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            label.upper(),
        )

    status_display.short_description = "Status"

    @admin.display(boolean=True, description="Bound")
    def bound(self, obj):
        return obj.machine_id is not None


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """Admin interface for Purchase model."""

    list_display = ["reference", "email", "license_key", "created_at"]
    list_filter = ["created_at"]
    search_fields = ["reference", "email", "license_key", "customer_reference"]
    readonly_fields = [
        "reference",
        "email",
        "license_key",
        "customer_reference",
        "subscription_reference",
        "download_token",
        "download_expires_at",
        "created_at",
    ]

    def has_add_permission(self, request):
        """Purchases are only recorded by the purchase feed."""
        return False
