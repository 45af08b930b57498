"""Security Headers Middleware

Adds security headers to HTTP responses.

The JSON API consumed by the booking front end gains little from them, so they
are disabled by default. Enable SECURITY_HEADERS_ENABLED when the service is
exposed directly to browsers.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all HTTP responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        if not config.SECURITY_HEADERS_ENABLED:
            return response

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        # API responses are never framed
        response.headers["X-Frame-Options"] = "DENY"

        if config.HSTS_ENABLED:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        response.headers["Referrer-Policy"] = "no-referrer-when-downgrade"

        return response
