"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.db import DatabaseError
from django.http import Http404
from opentelemetry import trace
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AdminRequiredError,
    BetaSignupNotFoundError,
    DomainException,
    DuplicateSignupError,
    IdentityNotFoundError,
    InvalidRevocationTargetError,
    IssuanceExhaustedError,
    NotOwnedError,
    PurchaseRevokedError,
    RevocationIncompleteError,
    SelfRevocationError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = (
    (NotOwnedError, status.HTTP_404_NOT_FOUND),
    ((IdentityNotFoundError, BetaSignupNotFoundError), status.HTTP_404_NOT_FOUND),
    (AdminRequiredError, status.HTTP_403_FORBIDDEN),
    ((SelfRevocationError, InvalidRevocationTargetError), status.HTTP_400_BAD_REQUEST),
    ((DuplicateSignupError, PurchaseRevokedError), status.HTTP_409_CONFLICT),
    (UpstreamUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    ((IssuanceExhaustedError, RevocationIncompleteError), status.HTTP_500_INTERNAL_SERVER_ERROR),
)


class APIError(APIException):
    """Base API exception with error code."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "An error occurred"
    default_code = "api_error"

    def __init__(self, detail=None, code=None, status_code=None):
        """
        Initialize API error.

        Args:
            detail: Error message
            code: Error code
            status_code: HTTP status code
        """
        if status_code:
            self.status_code = status_code
        if code:
            self.default_code = code
        super().__init__(detail)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id()

    if isinstance(exc, DatabaseError):
        exc = UpstreamUnavailableError()

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail) if isinstance(
            response.data, dict
        ) else response.data
        response.data = {"error": {"code": code, "message": detail}}
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id() -> Optional[str]:
    """Extract the current trace ID, if a span is being recorded."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")


def _status_for(exc: DomainException) -> int:
    for exc_types, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_types):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = _status_for(exc)
    body = {"error": {"code": exc.code, "message": exc.message}}
    if isinstance(exc, RevocationIncompleteError):
        body["error"]["failed_step"] = exc.failed_step
        body["error"]["progress"] = exc.progress.to_dict()

    log = logger.error if status_code >= 500 else logger.warning
    log("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(body, status=status_code)


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
