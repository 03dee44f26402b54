"""
User administration API views.

Admin-only listing and revocation of users.
"""

from dataclasses import asdict

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.revoke_identity import RevokeIdentityCommand
from accounts.application.handlers.list_identities_handler import ListIdentitiesHandler
from accounts.application.handlers.revoke_identity_handler import RevokeIdentityHandler
from accounts.application.queries.list_identities import ListIdentitiesQuery
from accounts.infrastructure.repositories.django_beta_signup_repository import (
    DjangoBetaSignupRepository,
)
from accounts.infrastructure.repositories.django_identity_directory import (
    DjangoIdentityDirectory,
)
from accounts.infrastructure.repositories.django_usage_repository import DjangoUsageRepository
from api.permissions import is_licensing_admin
from api.v1.admin.serializers import (
    ListUsersResponseSerializer,
    RevocationResultSerializer,
    RevokeUserRequestSerializer,
)
from core.config import LicensingConfig
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_identity_directory = DjangoIdentityDirectory()
_license_repo = DjangoLicenseRepository()
_usage_repo = DjangoUsageRepository()
_beta_signup_repo = DjangoBetaSignupRepository()

tracer = get_tracer(__name__)


class ListUsersView(APIView):
    """View for the admin user listing."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_users",
        summary="List Users",
        description=(
            "List users with their license counts and beta status. "
            "The limit is clamped to 1..500 and defaults to 200."
        ),
        tags=["Admin"],
        parameters=[
            OpenApiParameter(
                name="limit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Maximum number of users to return",
            ),
        ],
        responses={
            200: ListUsersResponseSerializer,
            403: {"description": "Admin only"},
        },
    )
    def get(self, request: Request) -> Response:
        """List users."""
        return async_to_sync(self._handle_list)(request, is_licensing_admin(request.user))

    async def _handle_list(self, request: Request, requester_is_admin: bool) -> Response:
        """Async handler for the user listing."""
        with tracer.start_as_current_span("list_users") as span:
            handler = ListIdentitiesHandler(
                identity_directory=_identity_directory,
                license_repository=_license_repo,
                beta_signup_repository=_beta_signup_repo,
                config=LicensingConfig.from_settings(),
            )
            users = await handler.handle(
                ListIdentitiesQuery(
                    requester_is_admin=requester_is_admin,
                    limit=request.query_params.get("limit"),
                )
            )
            span.set_attribute("users.count", len(users))
            return Response(
                ListUsersResponseSerializer({"success": True, "users": users}).data,
                status=status.HTTP_200_OK,
            )


class RevokeUserView(APIView):
    """View for revoking a user and everything they own."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="revoke_user",
        summary="Revoke User",
        description=(
            "Delete a user's usage records, beta signups, licenses and account. "
            "If a step fails the response reports progress; repeating the call "
            "finishes the job."
        ),
        tags=["Admin"],
        request=RevokeUserRequestSerializer,
        responses={
            200: RevocationResultSerializer,
            400: {"description": "No target given, or target is yourself"},
            403: {"description": "Admin only"},
            404: {"description": "Target user not found"},
            500: {"description": "Revocation incomplete; body carries progress"},
        },
    )
    def post(self, request: Request) -> Response:
        """Revoke a user."""
        return async_to_sync(self._handle_revoke)(request, is_licensing_admin(request.user))

    async def _handle_revoke(self, request: Request, requester_is_admin: bool) -> Response:
        """Async handler for revocation."""
        with tracer.start_as_current_span("revoke_user") as span:
            serializer = RevokeUserRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = RevokeIdentityHandler(
                identity_directory=_identity_directory,
                license_repository=_license_repo,
                usage_repository=_usage_repo,
                beta_signup_repository=_beta_signup_repo,
            )
            result = await handler.handle(
                RevokeIdentityCommand(
                    requester_id=request.user.pk,
                    requester_is_admin=requester_is_admin,
                    user_id=serializer.validated_data.get("user_id"),
                    email=serializer.validated_data.get("email"),
                )
            )

            span.set_attribute("revocation.license_count", result.deleted_license_count)
            span.set_status(Status(StatusCode.OK))
            return Response(
                RevocationResultSerializer({"success": True, **asdict(result)}).data,
                status=status.HTTP_200_OK,
            )
