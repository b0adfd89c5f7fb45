"""
Bookmarks Service — Request Logging Middleware
================================================

What:  One access log line per HTTP request.
How:   Times the downstream call, then reads what routing resolved: the
       route template (`/bookmarks/{bookmark_id}`), the bookmark id from
       the path and, for creates, the Location of the new bookmark. The
       level follows the status class (5xx → ERROR, 4xx → WARNING,
       otherwise INFO).
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Example line:
    PATCH /bookmarks/{bookmark_id} id=2 → 204 3.1ms [a1b2c3d4] from 10.0.0.5

Not logged: request bodies and the Authorization header.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookmarks_api.middleware.request_id import request_id_var

logger = logging.getLogger("bookmarks.access")


def _status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    # Set by the router once a route matched; unmatched paths keep the raw path.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, route, bookmark id, status and duration of each request."""

    # Health probes run every few seconds and would drown the log.
    SILENT_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get("")
        route = _route_template(request)
        bookmark_id = request.scope.get("path_params", {}).get("bookmark_id")
        client_ip = request.client.host if request.client else "unknown"
        status = response.status_code

        extra: Dict[str, Any] = {
            "request_id": rid,
            "method": request.method,
            "path": request.url.path,
            "route": route,
            "status": status,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
        }
        target = route
        if bookmark_id is not None:
            extra["bookmark_id"] = bookmark_id
            target = f"{route} id={bookmark_id}"
        location = response.headers.get("location")
        if location:
            extra["location"] = location
            target = f"{route} ({location})"

        logger.log(
            _status_level(status),
            "%s %s → %d %.1fms [%s] from %s",
            request.method,
            target,
            status,
            duration_ms,
            rid,
            client_ip,
            extra=extra,
        )

        return response
