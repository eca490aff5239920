"""
API key authentication middleware.

This middleware gates every /api/v1/ route: no view code runs
for a request without a valid, unexpired key whose scope
allows the HTTP method.
"""

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from core.domain.exceptions import DomainException, InsufficientScopeError, InvalidAPIKeyError
from core.infrastructure.models import ApiKey

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/api/v1/"


def _error_response(exc: DomainException, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": exc.code, "message": exc.message}}, status=status)


class APIKeyAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for API key authentication.

    This middleware:
    1. Reads the key from the configured header or an
       ``Authorization: Bearer`` header
    2. Returns 401 Unauthorized for missing, unknown or expired keys
    3. Returns 403 Forbidden when the key scope forbids the method
    4. Stores the key on ``request.api_key`` for views and logging
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401/403 if authentication fails, None otherwise
        """
        if not request.path.startswith(PROTECTED_PREFIX):
            return None
        return self._authenticate(request)

    def _extract_key(self, request: HttpRequest) -> str:
        header = getattr(settings, "API_KEY_HEADER", "X-API-Key")
        api_key = request.headers.get(header)
        if api_key:
            return api_key.strip()
        authorization = request.headers.get("Authorization", "")
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer":
            return credentials.strip()
        return ""

    def _authenticate(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Authenticate an API request.

        Args:
            request: HTTP request

        Returns:
            HttpResponse if auth fails, None if successful
        """
        raw_key = self._extract_key(request)
        if not raw_key:
            return _error_response(
                InvalidAPIKeyError("Missing API key. Provide a Bearer token or X-API-Key header."),
                401,
            )

        api_key = ApiKey.lookup(raw_key)
        if not api_key:
            logger.warning("Invalid API key attempted: %s...", raw_key[:8])
            return _error_response(InvalidAPIKeyError(), 401)

        if not api_key.is_valid():
            logger.warning("Expired API key attempted: %s...", raw_key[:8])
            return _error_response(InvalidAPIKeyError("API key expired"), 401)

        if not api_key.allows(request.method):
            logger.warning(
                "API key %s... with scope %s denied %s %s",
                api_key.key_prefix,
                api_key.scope,
                request.method,
                request.path,
            )
            return _error_response(InsufficientScopeError(), 403)

        api_key.mark_used()
        request.api_key = api_key  # type: ignore
        return None
