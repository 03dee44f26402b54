"""
Beta program API views.

Public signup and tester roster, plus admin approval.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.approve_beta_signup import ApproveBetaSignupCommand
from accounts.application.commands.submit_beta_signup import SubmitBetaSignupCommand
from accounts.application.handlers.beta_signup_handlers import (
    ApproveBetaSignupHandler,
    SubmitBetaSignupHandler,
)
from accounts.application.handlers.list_testers_handler import ListTestersHandler
from accounts.application.queries.list_testers import ListTestersQuery
from accounts.infrastructure.repositories.django_beta_signup_repository import (
    DjangoBetaSignupRepository,
)
from accounts.infrastructure.repositories.django_identity_directory import (
    DjangoIdentityDirectory,
)
from api.exceptions import APIError
from api.permissions import is_licensing_admin
from api.v1.beta.serializers import (
    ApproveBetaSignupRequestSerializer,
    BetaSignupDTOSerializer,
    BetaSignupRequestSerializer,
    TesterRosterSerializer,
)
from core.config import LicensingConfig
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.handlers.issue_license_handler import IssueFromApprovalHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_beta_signup_repo = DjangoBetaSignupRepository()
_identity_directory = DjangoIdentityDirectory()
_license_repo = DjangoLicenseRepository()

tracer = get_tracer(__name__)


class BetaSignupView(APIView):
    """View for joining the beta list."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="submit_beta_signup",
        summary="Join Beta",
        description="Add an applicant to the beta list. Approval happens separately.",
        tags=["Beta"],
        request=BetaSignupRequestSerializer,
        responses={
            201: {"description": "Signup recorded"},
            400: {"description": "Missing field or invalid email"},
            409: {"description": "Email already on the beta list"},
        },
    )
    def post(self, request: Request) -> Response:
        """Submit a beta signup."""
        return async_to_sync(self._handle_signup)(request)

    async def _handle_signup(self, request: Request) -> Response:
        """Async handler for beta signup."""
        with tracer.start_as_current_span("submit_beta_signup") as span:
            serializer = BetaSignupRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise APIError(
                    "Name, email, and channel handle are required.", code="invalid_signup"
                )

            data = serializer.validated_data
            try:
                await SubmitBetaSignupHandler(_beta_signup_repo).handle(
                    SubmitBetaSignupCommand(
                        name=data["name"],
                        email=data["email"],
                        channel_identifier=data["channel_identifier"],
                        content_type=data.get("content_type"),
                        message=data.get("message"),
                    )
                )
            except ValueError as e:
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise APIError(str(e), code="invalid_signup") from e

            span.set_status(Status(StatusCode.OK))
            return Response({"success": True}, status=status.HTTP_201_CREATED)


class ApproveBetaSignupView(APIView):
    """View for approving a beta signup."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="approve_beta_signup",
        summary="Approve Beta Signup",
        description="Issue a license for the signup's email and mark it approved.",
        tags=["Beta"],
        request=ApproveBetaSignupRequestSerializer,
        responses={
            200: BetaSignupDTOSerializer,
            403: {"description": "Admin only"},
            404: {"description": "Beta signup not found"},
        },
    )
    def post(self, request: Request, signup_id: int) -> Response:
        """Approve a signup."""
        return async_to_sync(self._handle_approve)(
            request, signup_id, is_licensing_admin(request.user)
        )

    async def _handle_approve(
        self, request: Request, signup_id: int, requester_is_admin: bool
    ) -> Response:
        """Async handler for approval."""
        with tracer.start_as_current_span("approve_beta_signup") as span:
            span.set_attribute("beta_signup.id", signup_id)
            serializer = ApproveBetaSignupRequestSerializer(data=request.data)
            if not serializer.is_valid():
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

            handler = ApproveBetaSignupHandler(
                beta_signup_repository=_beta_signup_repo,
                issue_handler=IssueFromApprovalHandler(
                    license_repository=_license_repo,
                    config=LicensingConfig.from_settings(),
                ),
            )
            result = await handler.handle(
                ApproveBetaSignupCommand(
                    signup_id=signup_id,
                    requester_is_admin=requester_is_admin,
                    expires_at=serializer.validated_data.get("expires_at"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return Response(BetaSignupDTOSerializer(result).data, status=status.HTTP_200_OK)


class TestersView(APIView):
    """View for the public tester roster."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="list_testers",
        summary="List Testers",
        description="Public roster of beta testers by channel handle or first name.",
        tags=["Beta"],
        responses={200: TesterRosterSerializer},
    )
    def get(self, request: Request) -> Response:
        """List testers."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        """Async handler for the tester roster."""
        with tracer.start_as_current_span("list_testers"):
            roster = await ListTestersHandler(_identity_directory, _beta_signup_repo).handle(
                ListTestersQuery()
            )
            return Response(TesterRosterSerializer(roster).data, status=status.HTTP_200_OK)
