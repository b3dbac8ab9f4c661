"""
Maison Catalog API: Access Log Middleware
===========================================

One line per request on the `maison.access` logger:

    POST /api/products/{product_id} 200 842.3ms [3f9a1c02] 1.2MB from 10.0.0.7

The path is the route template when one matched, so every product update
aggregates under the same key instead of one key per id. The request size
comes from Content-Length; multipart bodies themselves are never read or
logged.

Skipped: /health probes and CORS preflights.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from maison.middleware.request_id import request_id_var

logger = logging.getLogger("maison.access")

QUIET_PATHS = frozenset({"/health"})


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _format_size(content_length: Optional[str]) -> str:
    if not content_length or not content_length.isdigit():
        return "-"
    size = int(content_length)
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.1f}MB"
    if size >= 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size}B"


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            path = _route_template(request)
            rid = request_id_var.get("")
            client_ip = request.client.host if request.client else "-"
            size = _format_size(request.headers.get("content-length"))
            logger.log(
                _level_for(status),
                "%s %s %d %.1fms [%s] %s from %s",
                request.method, path, status, elapsed_ms, rid, size, client_ip,
                extra={
                    "request_id": rid,
                    "route": path,
                    "status": status,
                    "duration_ms": round(elapsed_ms, 2),
                    "request_bytes": size,
                },
            )
