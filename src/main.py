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
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config.settings import settings
from src.br_common.errors import AppError, InternalError, MalformedRequestError
from src.br_gateway.middleware.request_log import RequestLogMiddleware
from src.br_order.api.router import router as order_router
from src.br_order.application.store import OrderStore

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def _error_json(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": exc.message, "code": exc.code},
    )


def create_app(store: OrderStore | None = None) -> FastAPI:
    """Build the app around an explicit OrderStore handle.

    The lifespan opens and closes the store; callers that drive the app without
    lifespan events (httpx ASGITransport) must open the store themselves.
    """
    order_store = store or OrderStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        await order_store.open()
        yield
        await order_store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.order_store = order_store

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _error_json(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{location}: {first.get('msg', 'invalid value')}" if location else "Malformed request"
        return _error_json(MalformedRequestError(detail))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_json(InternalError())

    app.include_router(order_router, prefix="/api")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": VERSION}

    return app


logging.basicConfig(level=settings.LOG_LEVEL)

app = create_app()
