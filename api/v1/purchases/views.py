"""
Purchase feed API views.

The payment provider integration calls this endpoint once per completed
purchase, possibly more than once for the same purchase.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.permissions import PURCHASE_FEED_HEADER, HasPurchaseFeedToken
from api.v1.purchases.serializers import (
    PurchaseCompletedRequestSerializer,
    PurchaseCompletedResponseSerializer,
)
from core.config import LicensingConfig
from core.domain.value_objects import clean_identifier
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.issue_from_purchase import IssueFromPurchaseCommand
from licenses.application.handlers.issue_license_handler import IssueFromPurchaseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_purchase_repository import (
    DjangoPurchaseRepository,
)

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_purchase_repo = DjangoPurchaseRepository()

tracer = get_tracer(__name__)


class PurchaseCompletedView(APIView):
    """View receiving completed purchases from the trusted feed."""

    authentication_classes = []
    permission_classes = [HasPurchaseFeedToken]

    @extend_schema(
        operation_id="purchase_completed",
        summary="Purchase Completed",
        description=(
            "Issue the license for a completed purchase. Delivering the same "
            "purchase again returns the license issued the first time."
        ),
        tags=["Purchases"],
        parameters=[
            OpenApiParameter(
                name=PURCHASE_FEED_HEADER,
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Shared secret of the purchase feed",
            ),
        ],
        request=PurchaseCompletedRequestSerializer,
        responses={
            200: PurchaseCompletedResponseSerializer,
            400: {"description": "Bad Request"},
            403: {"description": "Invalid purchase feed token"},
            409: {"description": "License for this purchase was revoked"},
            503: {"description": "License store unavailable, retry later"},
        },
    )
    def post(self, request: Request) -> Response:
        """Record a completed purchase."""
        return async_to_sync(self._handle_purchase)(request)

    async def _handle_purchase(self, request: Request) -> Response:
        """Async handler for completed purchases."""
        with tracer.start_as_current_span("purchase_completed") as span:
            serializer = PurchaseCompletedRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            data = serializer.validated_data
            span.set_attribute("purchase.reference", data["reference"])
            handler = IssueFromPurchaseHandler(
                license_repository=_license_repo,
                purchase_repository=_purchase_repo,
                config=LicensingConfig.from_settings(),
            )
            result = await handler.handle(
                IssueFromPurchaseCommand(
                    reference=data["reference"],
                    email=data.get("email"),
                    custom_expiry=data.get("custom_expiry"),
                    customer_reference=clean_identifier(data.get("customer_reference")),
                    subscription_reference=clean_identifier(data.get("subscription_reference")),
                )
            )

            span.set_attribute("purchase.replayed", result.replayed)
            span.set_status(Status(StatusCode.OK))
            return Response(
                PurchaseCompletedResponseSerializer(
                    {
                        "received": True,
                        "license_key": result.license.key,
                        "replayed": result.replayed,
                    }
                ).data,
                status=status.HTTP_200_OK,
            )
