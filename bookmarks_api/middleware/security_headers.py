"""
Bookmarks Service — Security Headers Middleware
=================================================

What:  Adds standard hardening headers to every response.

Headers:
    X-Content-Type-Options: nosniff   → browsers keep the declared JSON type
    X-Frame-Options: DENY             → responses cannot be framed
    Referrer-Policy: no-referrer
    X-DNS-Prefetch-Control: off

Headers already set by a route are left untouched.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response
