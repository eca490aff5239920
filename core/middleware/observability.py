"""
Observability middleware.

This middleware adds structured request logging and correlation ids.
Log records carry the OpenTelemetry trace context when a span is active.
"""

import logging
import time
import uuid
from typing import Callable, Optional, Tuple

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_span_id, format_trace_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _trace_context() -> Tuple[Optional[str], Optional[str]]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None, None
    return format_trace_id(span_context.trace_id), format_span_id(span_context.span_id)


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    This middleware:
    1. Reuses an incoming correlation id or generates one
    2. Logs request start and completion with duration
    3. Adds correlation id and duration to response headers
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and add observability.

        Args:
            request: HTTP request

        Returns:
            HTTP response with observability headers
        """
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore

        trace_id, span_id = _trace_context()
        log_extra = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        if trace_id:
            log_extra["trace_id"] = trace_id
            log_extra["span_id"] = span_id

        logger.info("Request started", extra=log_extra)

        start_time = time.time()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **log_extra,
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        self._log_response(request, response, duration, log_extra)

        response[CORRELATION_HEADER] = correlation_id
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    def _log_response(self, request, response, duration, log_extra):
        """Log structured response information."""
        log_extra = {
            **log_extra,
            "status_code": response.status_code,
            "duration_ms": round(duration * 1000, 2),
        }

        api_key = getattr(request, "api_key", None)
        if api_key:
            log_extra["api_key_prefix"] = api_key.key_prefix
            log_extra["api_key_name"] = api_key.name

        if response.status_code >= 500:
            logger.error("Request completed with server error", extra=log_extra)
        elif response.status_code >= 400:
            logger.warning("Request completed with client error", extra=log_extra)
        else:
            logger.info("Request completed successfully", extra=log_extra)
