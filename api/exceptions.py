"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error leaves the API in one envelope:
``{"error": {"code": ..., "message": ..., "violations": [...]}}``.
"""

import logging
from typing import Any, Dict, List, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ErrorDetail, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    BrandNotFoundError,
    DomainException,
    FieldViolation,
    InsufficientScopeError,
    InvalidAPIKeyError,
    ValidationFailedError,
)
from core.metrics import errors_total
from core.middleware.metrics import normalize_endpoint

logger = logging.getLogger(__name__)

NON_FIELD_KEYS = ("non_field_errors",)


def violations_from_errors(errors: Any, prefix: str = "") -> List[FieldViolation]:
    """
    Flatten DRF serializer errors into field violations.

    Nested serializer and list errors become indexed paths such
    as ``images[1].type``.

    Args:
        errors: ``serializer.errors`` or ``ValidationError.detail``
        prefix: Path of the enclosing field

    Returns:
        List of FieldViolation, in serializer field order
    """
    violations: List[FieldViolation] = []
    if isinstance(errors, dict):
        for key, value in errors.items():
            if isinstance(key, int):
                path = f"{prefix}[{key}]"
            elif key in NON_FIELD_KEYS:
                path = prefix or key
            else:
                path = f"{prefix}.{key}" if prefix else str(key)
            violations.extend(violations_from_errors(value, path))
    elif isinstance(errors, list):
        for index, value in enumerate(errors):
            if isinstance(value, ErrorDetail):
                violations.append(FieldViolation(prefix, value.code, str(value)))
            elif isinstance(value, (dict, list)):
                violations.extend(violations_from_errors(value, f"{prefix}[{index}]"))
            else:
                violations.append(FieldViolation(prefix, "invalid", str(value)))
    elif isinstance(errors, ErrorDetail):
        violations.append(FieldViolation(prefix, errors.code, str(errors)))
    return violations


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, ValidationError):
        response = _handle_domain_exception(
            ValidationFailedError(violations_from_errors(exc.detail)), trace_id
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail)
        response.data = {"error": {"code": code, "message": str(detail)}}
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if response.status_code >= 500 or not isinstance(exc, (DomainException, ValidationError)):
        errors_total.labels(
            error_type=type(exc).__name__, endpoint=_get_endpoint(context)
        ).inc()

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return normalize_endpoint(request.path) if request else "unknown"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BrandNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidAPIKeyError):
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, InsufficientScopeError):
        status_code = status.HTTP_403_FORBIDDEN

    body: Dict[str, Any] = {"code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationFailedError):
        body["violations"] = [violation.to_dict() for violation in exc.violations]
        logger.info(
            "Validation failed on %s",
            ", ".join(exc.fields),
            extra={"trace_id": trace_id, "error_code": exc.code},
        )
    else:
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    return Response({"error": body}, status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    response = exception_handler(exc, context)
    if not response:
        response = Response(
            {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    else:
        response.data = {
            "error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}
        }
    return response
