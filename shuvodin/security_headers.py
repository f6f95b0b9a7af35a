"""
Security headers middleware.

Every API response gets a restrictive header set: clickjacking and
MIME-sniffing protection, a JSON-only Content-Security-Policy, a locked
down Permissions-Policy and no-store caching. HSTS is only sent in
production.
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .config import ENVIRONMENT, FRONTEND_URL

logger = logging.getLogger(__name__)

IS_PRODUCTION = ENVIRONMENT.lower() == "production"


def get_csp_policy() -> str:
    """CSP for an API that only serves JSON (and the occasional data URL QR code)"""
    directives = [
        "default-src 'none'",
        f"frame-ancestors 'self' {FRONTEND_URL}",
        "img-src 'self' data:",
        "base-uri 'none'",
        "form-action 'self'",
    ]
    return "; ".join(directives)


def get_permissions_policy() -> str:
    features = [
        "accelerometer=()",
        "camera=()",
        "geolocation=()",
        "gyroscope=()",
        "microphone=()",
        "payment=()",
        "usb=()",
        "interest-cohort=()",
    ]
    return ", ".join(features)


def get_security_headers_dict() -> dict:
    headers = {
        "X-Frame-Options": "SAMEORIGIN",
        "X-Content-Type-Options": "nosniff",
        "X-XSS-Protection": "1; mode=block",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Content-Security-Policy": get_csp_policy(),
        "Permissions-Policy": get_permissions_policy(),
        "X-Permitted-Cross-Domain-Policies": "none",
        "Cross-Origin-Opener-Policy": "same-origin",
    }
    if IS_PRODUCTION:
        headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds get_security_headers_dict() to every response outside exclude_paths"""

    def __init__(self, app, exclude_paths: Optional[list[str]] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or []
        self.headers = get_security_headers_dict()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        path = request.url.path
        if any(path.startswith(excluded) for excluded in self.exclude_paths):
            return response

        for name, value in self.headers.items():
            response.headers[name] = value

        # Endpoints that set their own caching (e.g. public catalogs) keep it
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"

        return response
