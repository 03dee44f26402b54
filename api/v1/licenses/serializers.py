"""
Serializers for license API endpoints.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    license_key = serializers.CharField(required=True, trim_whitespace=True)
    machine_id = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )


class ValidateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for validate license response."""

    valid = serializers.BooleanField()
    reason = serializers.CharField()
    message = serializers.CharField()
    expires_at = serializers.DateTimeField(allow_null=True)
    newly_bound = serializers.BooleanField()


class ResetLicenseRequestSerializer(serializers.Serializer):
    """Serializer for reset license request."""

    license_key = serializers.CharField(required=True, max_length=64)


class ResetLicenseResponseSerializer(serializers.Serializer):
    """Serializer for reset license response."""

    success = serializers.BooleanField(default=True)
    license_key = serializers.CharField()
    message = serializers.CharField()


class LicenseDTOSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    key = serializers.CharField()
    owner_email = serializers.EmailField(allow_null=True)
    status = serializers.CharField()
    is_bound = serializers.BooleanField()
    expires_at = serializers.DateTimeField(allow_null=True)
    last_seen = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()


class MyLicensesResponseSerializer(serializers.Serializer):
    """Serializer for the owner's license list."""

    licenses = LicenseDTOSerializer(many=True)
