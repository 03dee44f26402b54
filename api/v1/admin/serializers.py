"""
Serializers for user administration endpoints.
"""

from rest_framework import serializers


class IdentityDTOSerializer(serializers.Serializer):
    """Serializer for IdentityDTO."""

    id = serializers.IntegerField()
    email = serializers.CharField()
    created_at = serializers.DateTimeField(allow_null=True)
    last_login = serializers.DateTimeField(allow_null=True)
    is_admin = serializers.BooleanField()
    channel_identifier = serializers.CharField(allow_blank=True)
    license_count = serializers.IntegerField()
    active_license_count = serializers.IntegerField()
    beta_status = serializers.CharField(allow_null=True)


class ListUsersResponseSerializer(serializers.Serializer):
    """Serializer for the admin user listing."""

    success = serializers.BooleanField(default=True)
    users = IdentityDTOSerializer(many=True)


class RevokeUserRequestSerializer(serializers.Serializer):
    """Serializer for a revocation request; one of user_id or email."""

    user_id = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RevocationResultSerializer(serializers.Serializer):
    """Serializer for RevocationResultDTO."""

    success = serializers.BooleanField(default=True)
    deleted_user_id = serializers.IntegerField()
    deleted_email = serializers.CharField()
    deleted_license_count = serializers.IntegerField()
    deleted_usage_count = serializers.IntegerField()
    deleted_signup_count = serializers.IntegerField()
