"""Request logging middleware.

One line per proxied call with method, path, status, latency and a short
request id. The id is stored on request.state and echoed back in the
X-Request-ID header so a client-side failure can be matched to the log.
Upstream-facing failures (status >= 400) are logged at WARNING.

    INFO    [GET] /api/price → 200 (41ms) req_a1b2c3d4e5f6
    WARNING [POST] /api/orders → 400 (2ms) req_0f1e2d3c4b5a
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("lo.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            latency_ms,
            request_id,
        )
        return response
