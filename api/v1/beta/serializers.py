"""
Serializers for beta program endpoints.
"""

from rest_framework import serializers


class BetaSignupRequestSerializer(serializers.Serializer):
    """Serializer for a beta signup request."""

    name = serializers.CharField(required=True, max_length=255)
    email = serializers.CharField(required=True, max_length=254)
    channel_identifier = serializers.CharField(required=True, max_length=255)
    content_type = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=100
    )
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ApproveBetaSignupRequestSerializer(serializers.Serializer):
    """Serializer for an approval request."""

    expires_at = serializers.DateTimeField(required=False, allow_null=True)


class BetaSignupDTOSerializer(serializers.Serializer):
    """Serializer for BetaSignupDTO."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    email = serializers.EmailField()
    channel_identifier = serializers.CharField()
    status = serializers.CharField()
    license_key = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    approved_at = serializers.DateTimeField(allow_null=True)


class TesterSerializer(serializers.Serializer):
    """Serializer for one roster entry."""

    channel = serializers.CharField(allow_null=True)
    display = serializers.CharField()


class TesterRosterSerializer(serializers.Serializer):
    """Serializer for TesterRosterDTO."""

    testers = TesterSerializer(many=True)
    total = serializers.IntegerField()
