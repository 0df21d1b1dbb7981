"""Per-request access log for the order API.

One line per request: method, path, status, latency and a correlation ID. The
ID is taken from an incoming X-Request-ID header when the caller sends one and
is echoed back on the response either way.

    INFO [GET] /api/orders → 200 (3ms) req=9f2c41d07a3e wallet=0xA11CE
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("br.request")

REQUEST_ID_HEADER = "X-Request-ID"


def _request_id(request: Request) -> str:
    return request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _request_id(request)
        request.state.request_id = request_id
        wallet = request.query_params.get("wallet")
        suffix = f" wallet={wallet}" if wallet else ""

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "[%s] %s → 500 (%.0fms) req=%s%s",
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
                request_id,
                suffix,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) req=%s%s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            request_id,
            suffix,
        )
        return response
