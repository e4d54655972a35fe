"""Access log for the burger API.

One line per request, e.g.:

    INFO cb.request: [POST] /api/orders → 201 (12ms) req_3f9c0a7be21d
    INFO cb.request: [DELETE] /api/orders/order-1718000000000-k3j9x0q2a → 409 (4ms) req_90d1c2aa47e3

The id is stored on request.state, where the error handlers pick it up for
the response envelope, and echoed in the X-Request-ID header.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cb.request")

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = new_request_id()
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        took_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            took_ms,
            request_id,
        )
        return response
