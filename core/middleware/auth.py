"""
Admin capability middleware.

Card administration endpoints (list, generate, check-hwid, check-expired)
require an admin capability. Verify is public and unbind carries its own
shared secret in the request body.
"""

import hashlib
import logging
import secrets
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

CARDS_API_PREFIX = "/api/v1/cards"

PUBLIC_CARD_PATHS = (
    "/api/v1/cards/verify",
    "/api/v1/cards/unbind-hwid",
)


def _error(message: str, status: int) -> JsonResponse:
    return JsonResponse(
        {"error": {"code": "PERMISSION_DENIED", "message": message}},
        status=status,
    )


class AdminCapabilityMiddleware(MiddlewareMixin):
    """
    Middleware for admin capability checks.

    This middleware:
    1. Leaves public card endpoints and non-card paths alone
    2. Accepts an admin API key (X-Admin-Key or Bearer token) whose SHA-256
       digest is listed in CARDS_ADMIN_API_KEYS
    3. Accepts an active staff user from the Django session
    4. Returns 401 without a credential, 403 with a bad one
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate admin capability.

        Args:
            request: HTTP request

        Returns:
            JsonResponse with 401/403 if the check fails, None otherwise
        """
        if not self._requires_admin(request.path):
            return None

        api_key = self._extract_api_key(request)
        if api_key:
            if self._valid_api_key(api_key):
                request.admin_principal = "api_key:" + hashlib.sha256(  # type: ignore
                    api_key.encode("utf-8")
                ).hexdigest()[:12]
                return None
            logger.warning("Invalid admin API key attempted: %s...", api_key[:4])
            return _error("Invalid admin API key", 403)

        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            if user.is_active and user.is_staff:
                request.admin_principal = f"user:{user.pk}"  # type: ignore
                return None
            return _error("Admin capability required", 403)

        return _error("Missing admin credentials. Provide X-Admin-Key header.", 401)

    def _requires_admin(self, path: str) -> bool:
        """
        Check if this path needs the admin capability.

        Args:
            path: Request path

        Returns:
            True for card administration endpoints
        """
        if not path.startswith(CARDS_API_PREFIX):
            return False
        normalized = path.rstrip("/")
        return normalized not in PUBLIC_CARD_PATHS

    def _extract_api_key(self, request: HttpRequest) -> str:
        header = request.headers.get("X-Admin-Key", "")
        if header:
            return header.strip()
        authorization = request.headers.get("Authorization", "")
        if authorization.startswith("Bearer "):
            return authorization[len("Bearer "):].strip()
        return ""

    def _valid_api_key(self, api_key: str) -> bool:
        digest = hashlib.sha256(api_key.encode("utf-8")).hexdigest()
        matched = False
        for allowed in getattr(settings, "CARDS_ADMIN_API_KEYS", []):
            if secrets.compare_digest(digest, allowed.lower()):
                matched = True
        return matched
