from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

log = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Log the start and end of every request.

    A request id taken from the X-Request-ID header (or freshly generated) is
    bound into the structlog context for the duration of the request and
    echoed back in the response headers. Unhandled errors are rendered here
    as a JSON 500 so they carry the same header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.monotonic()
        log.info("request started", method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as exc:
            log.exception("unhandled error", method=request.method, path=request.url.path)
            response = JSONResponse(status_code=500, content={"error": str(exc)})

        duration_ms = int((time.monotonic() - start) * 1000)
        log.info(
            "request finished",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
