"""Envelope returned by every endpoint.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "2030-01-01T20:00:00+00:00", "request_id": "req_..."}

`code` is 0 on success and the AppError code otherwise; `data` is null on
errors. `request_id` echoes the X-Request-ID header set by
RequestLogMiddleware.
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request

from src.tg_common.datetime_utils import utc_now


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    request_id: str = Field(default_factory=new_request_id)


def _request_id_of(request: Request | None) -> str:
    if request is None:
        return new_request_id()
    return getattr(request.state, "request_id", None) or new_request_id()


def success_response(data: Any = None, request: Request | None = None) -> ApiResponse:
    return ApiResponse(data=data, request_id=_request_id_of(request))


def error_response(code: int, message: str, request: Request | None = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, request_id=_request_id_of(request))


def respond(request: Request, data: Any = None, message: str | None = None) -> ApiResponse:
    """Success envelope for a router handler."""
    resp = success_response(data, request)
    if message is not None:
        resp.message = message
    return resp
