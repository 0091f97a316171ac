"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body has the shape {"error": {"code", "message"}, ...context}.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AdminPermissionError,
    CardAlreadyUsedError,
    CardExpiredError,
    CardNotBoundError,
    CardNotFoundError,
    CardValidationError,
    DeviceConflictError,
    DomainException,
    DuplicateCardKeyError,
    SoftwareVersionNotConfiguredError,
    StoreFailureError,
)
from core.metrics import errors_total
from core.middleware.metrics import normalize_endpoint

logger = logging.getLogger(__name__)

DOMAIN_STATUS_CODES = {
    CardValidationError: status.HTTP_400_BAD_REQUEST,
    CardNotFoundError: status.HTTP_404_NOT_FOUND,
    CardExpiredError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DeviceConflictError: status.HTTP_409_CONFLICT,
    CardAlreadyUsedError: status.HTTP_409_CONFLICT,
    CardNotBoundError: status.HTTP_400_BAD_REQUEST,
    AdminPermissionError: status.HTTP_403_FORBIDDEN,
    DuplicateCardKeyError: status.HTTP_409_CONFLICT,
    StoreFailureError: status.HTTP_503_SERVICE_UNAVAILABLE,
    SoftwareVersionNotConfiguredError: status.HTTP_404_NOT_FOUND,
}


def error_body(code: str, message: str, **context) -> Dict[str, Any]:
    """Build the standard error body."""
    body: Dict[str, Any] = {"error": {"code": code, "message": message}}
    body.update(context)
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, APIException):
        response = _handle_api_exception(exc, context)
    elif isinstance(exc, Http404):
        response = Response(
            error_body("NOT_FOUND", "Resource not found"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    errors_total.labels(
        error_type=response.data["error"]["code"],
        endpoint=_endpoint(context),
    ).inc()

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def status_code_for(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status code."""
    for exc_type, status_code in DOMAIN_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return normalize_endpoint(request.path) if request is not None else "unknown"


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    else:
        logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    return Response(error_body(exc.code, exc.message, **exc.context), status=status_code)


def _handle_api_exception(exc: APIException, context: Dict[str, Any]) -> Response:
    """Handle DRF exceptions (parse errors, method not allowed, etc.)."""
    response = exception_handler(exc, context)
    code = exc.default_code.upper().replace("-", "_")
    if code == "PARSE_ERROR":
        code = "VALIDATION_ERROR"
    detail = response.data.get("detail", exc.default_detail) if isinstance(response.data, dict) else exc.default_detail
    response.data = error_body(code, str(detail))
    return response


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        error_body("INTERNAL_ERROR", "An internal error occurred"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
