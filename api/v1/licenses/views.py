"""
License API views.

These endpoints are used by:
- Client applications, to validate a key and bind a machine
- License owners, to list their licenses and reset a binding
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.reset_license import ResetLicenseCommand
from activations.application.commands.validate_license import ValidateLicenseCommand
from activations.application.handlers.reset_license_handler import ResetLicenseHandler
from activations.application.handlers.validate_license_handler import ValidateLicenseHandler
from api.exceptions import APIError
from api.v1.licenses.serializers import (
    MyLicensesResponseSerializer,
    ResetLicenseRequestSerializer,
    ResetLicenseResponseSerializer,
    ValidateLicenseRequestSerializer,
    ValidateLicenseResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.list_licenses_by_owner_handler import (
    ListLicensesByOwnerHandler,
)
from licenses.application.queries.list_licenses_by_owner import ListLicensesByOwnerQuery
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class ValidateLicenseView(APIView):
    """View for validating licenses from client applications."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check a license key for a machine. The first successful validation "
            "with a machine id binds the license to that machine. Rejections are "
            "reported in the body with status 200."
        ),
        tags=["Licenses"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidateLicenseResponseSerializer,
            400: {"description": "Missing license key"},
            503: {"description": "License store unavailable, retry later"},
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            serializer = ValidateLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                if "license_key" in serializer.errors:
                    raise APIError("Missing license_key.", code="missing_license_key")
                raise APIError(
                    "machine_id must be a string of at most 255 characters.",
                    code="invalid_machine_id",
                )

            command = ValidateLicenseCommand(
                license_key=serializer.validated_data["license_key"],
                machine_id=serializer.validated_data.get("machine_id"),
            )
            span.set_attribute("license.machine_supplied", bool(command.machine_id))

            result = await ValidateLicenseHandler(_license_repo).handle(command)

            span.set_attribute("license.reason", result.reason)
            span.set_status(Status(StatusCode.OK))
            return Response(
                ValidateLicenseResponseSerializer(result).data, status=status.HTTP_200_OK
            )


class ResetLicenseView(APIView):
    """View for an owner resetting their license binding."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="reset_license",
        summary="Reset License",
        description=(
            "Unbind a license you own from its machine and reactivate it, so it "
            "can be activated on a new machine."
        ),
        tags=["Licenses"],
        request=ResetLicenseRequestSerializer,
        responses={
            200: ResetLicenseResponseSerializer,
            400: {"description": "Bad Request"},
            404: {"description": "License not found or not owned by you"},
        },
    )
    def post(self, request: Request) -> Response:
        """Reset a license binding."""
        return async_to_sync(self._handle_reset)(request)

    async def _handle_reset(self, request: Request) -> Response:
        """Async handler for reset license."""
        with tracer.start_as_current_span("reset_license") as span:
            serializer = ResetLicenseRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            result = await ResetLicenseHandler(_license_repo).handle(
                ResetLicenseCommand(
                    license_key=serializer.validated_data["license_key"],
                    requesting_email=request.user.email,
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(
                ResetLicenseResponseSerializer(
                    {"success": True, "license_key": result.license_key, "message": result.message}
                ).data,
                status=status.HTTP_200_OK,
            )


class MyLicensesView(APIView):
    """View listing the caller's own licenses."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_my_licenses",
        summary="List My Licenses",
        description="List the licenses owned by the authenticated user's email.",
        tags=["Licenses"],
        responses={200: MyLicensesResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """List the caller's licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        """Async handler for listing licenses."""
        with tracer.start_as_current_span("list_my_licenses") as span:
            licenses = await ListLicensesByOwnerHandler(_license_repo).handle(
                ListLicensesByOwnerQuery(owner_email=request.user.email)
            )
            span.set_attribute("license.count", len(licenses))
            return Response(
                MyLicensesResponseSerializer({"licenses": licenses}).data,
                status=status.HTTP_200_OK,
            )
