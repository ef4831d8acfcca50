"""Per-request access log and request-id propagation.

A caller-supplied X-Request-ID is kept so ids can be traced across services;
otherwise a fresh `req_<12 hex>` id is minted. The id is stored on
request.state (picked up by ApiResponse) and echoed in the response header.

    INFO  [POST] /api/v1/tickets/abc/buy → 200 (23ms) req_a1b2c3d4e5f6
    WARN  [POST] /api/v1/tickets → 500 (4ms) req_...
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.tg_common.response import new_request_id

logger = logging.getLogger("tg.request")

REQUEST_ID_HEADER = "X-Request-ID"
_MAX_INBOUND_ID_LEN = 64


def _pick_request_id(request: Request) -> str:
    inbound = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if inbound and len(inbound) <= _MAX_INBOUND_ID_LEN:
        return inbound
    return new_request_id()


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _pick_request_id(request)
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
