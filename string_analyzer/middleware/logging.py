"""
String Analyzer Service - Request Logging Middleware
====================================================

What:  One log line per HTTP request: method, route, status, duration,
       request ID and client address.
How:   Log level follows the status class: 5xx → ERROR, 4xx → WARNING,
       everything else → INFO. /health is not logged.

Paths under /strings/ carry the stored value itself, so the line records the
matched route template (e.g. /strings/{string_value:path}) instead of the raw
path. Unmatched requests fall back to the raw path. Request bodies are never
logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from string_analyzer.middleware.request_id import request_id_var

logger = logging.getLogger("string_analyzer.access")

SKIPPED_PATHS = {"/health"}


def route_template(request: Request) -> str:
    """The path pattern of the matched route, or the raw path if none matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        # Routing fills scope["route"] while call_next runs
        route = route_template(request)
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            route,
            response.status_code,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
