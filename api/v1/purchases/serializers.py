"""
Serializers for purchase feed endpoints.
"""

from rest_framework import serializers


class PurchaseCompletedRequestSerializer(serializers.Serializer):
    """Serializer for a completed purchase delivered by the payment feed."""

    reference = serializers.CharField(required=True, max_length=255)
    email = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    custom_expiry = serializers.DateTimeField(required=False, allow_null=True)
    customer_reference = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )
    subscription_reference = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, max_length=255
    )


class PurchaseCompletedResponseSerializer(serializers.Serializer):
    """Serializer for purchase feed acknowledgement."""

    received = serializers.BooleanField()
    license_key = serializers.CharField()
    replayed = serializers.BooleanField()
