"""
Maison Catalog API: Request ID Middleware
===========================================

What:  Tags every request with a correlation id, echoes it back in
       X-Request-ID, and turns any exception nothing else handled into the
       standard 500 body.

Unhandled exceptions:
    A handler registered for bare `Exception` runs in Starlette's outermost
    error middleware, outside CORS and outside this middleware. This layer
    sits inside CORSMiddleware, so the 500 built here still carries the
    CORS headers and the request id.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def internal_error_response(rid: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "Server error",
            "request_id": rid,
        },
    )


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unhandled %s on %s %s: %s",
                rid, type(e).__name__, request.method, request.url.path, str(e),
                exc_info=True,
            )
            response = internal_error_response(rid)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
