"""
License and Purchase models.

This is the infrastructure layer model for licenses.
Domain entities are in licenses.domain.
"""
from django.db import models


class License(models.Model):
    """
    A license key entitling one bound machine to use the software.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("inactive", "Inactive"),
    ]

    key = models.CharField(max_length=64, unique=True)
    owner_email = models.EmailField(null=True, blank=True, db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    machine_id = models.CharField(max_length=255, null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    last_seen = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        app_label = "licenses"
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner_email", "status"], name="licenses_owner_status_idx"),
        ]

    def __str__(self):
        return self.key


class Purchase(models.Model):
    """
    Completed purchase, kept for audit and download re-display.

    ``license_key`` is a plain column so the record outlives a revoked
    license and keeps replays of the same purchase from re-issuing it.
    """

    reference = models.CharField(max_length=255, unique=True)
    email = models.CharField(max_length=254, db_index=True)
    license_key = models.CharField(max_length=64, db_index=True)
    customer_reference = models.CharField(max_length=255, null=True, blank=True)
    subscription_reference = models.CharField(max_length=255, null=True, blank=True)
    download_token = models.CharField(max_length=64, unique=True)
    download_expires_at = models.DateTimeField()
    created_at = models.DateTimeField()

    class Meta:
        app_label = "licenses"
        db_table = "purchases"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.reference} -> {self.license_key}"
