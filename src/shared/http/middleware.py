from __future__ import annotations

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shared.logging import bind_context, clear_context, get_logger, set_correlation_id

logger = get_logger("http")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a stable correlation id.

    - Reads X-Request-ID if the caller sent one, otherwise generates it.
    - Exposes it as request.state.request_id (error bodies carry it).
    - Binds it to the structlog context for the lifetime of the request.
    - Echoes it back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        set_correlation_id(request_id)
        bind_context(method=request.method, path=request.url.path)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            return response
        finally:
            clear_context()
