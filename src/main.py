"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.tg_account.api.router import router as account_router
from src.tg_common.database import check_connection, engine
from src.tg_common.errors import AppError
from src.tg_common.response import error_response
from src.tg_gateway.api.router import router as auth_router
from src.tg_gateway.middleware.request_log import RequestLogMiddleware
from src.tg_ticket.api.router import router as ticket_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    await check_connection()
    logger.info("%s started (db pool %d+%d)", settings.APP_NAME,
                settings.DB_POOL_SIZE, settings.DB_MAX_OVERFLOW)
    yield
    await engine.dispose()
    logger.info("%s stopped", settings.APP_NAME)


app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render any domain error as the standard envelope with its own code."""
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.debug("%s %s rejected: [%d] %s",
                     request.method, request.url.path, exc.code, exc.message)
    body = error_response(exc.code, exc.message, request)
    return JSONResponse(status_code=exc.http_status, content=body.model_dump())


for _router in (auth_router, account_router, ticket_router):
    app.include_router(_router, prefix=API_PREFIX)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "app": settings.APP_NAME}
