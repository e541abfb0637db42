"""Limit-order desk API: a keyed proxy in front of the 1inch orderbook and spot-price services.

Local dev: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- the uvloop policy has to be in place before asyncio is touched

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.lo_common.errors import AppError, InternalError
from src.lo_common.http_client import close_http_client, get_http_client
from src.lo_common.response import error_response
from src.lo_gateway.api.router import router as diagnostics_router
from src.lo_gateway.middleware.request_log import RequestLogMiddleware
from src.lo_orderbook.api.router import router as orders_router
from src.lo_price.api.router import router as price_router

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the shared upstream pool on startup and release it on shutdown."""
    await get_http_client()
    if not settings.ONEINCH_API_KEY:
        logger.warning("ONEINCH_API_KEY is not set; proxy routes will answer 500")
    yield
    await close_http_client()


app = FastAPI(
    title=settings.APP_NAME,
    version=API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: [%d] %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.http_status, content=error_response(exc.message).model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("%s %s crashed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=error_response(InternalError().message).model_dump())


app.include_router(orders_router, prefix="/api")
app.include_router(price_router, prefix="/api")
app.include_router(diagnostics_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": API_VERSION, "upstream": settings.ONEINCH_API_BASE_URL}
