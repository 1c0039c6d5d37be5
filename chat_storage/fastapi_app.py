"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Run with:
    uvicorn chat_storage.fastapi_app:create_fastapi_app --factory --port 8080
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from chat_storage.config.logging_config import (
    DEFAULT_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from chat_storage.config.settings import Config
from chat_storage.observability import observe_request_latency
from chat_storage.presentation.api import (
    messages_router,
    metrics_router,
    sessions_router,
)

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", DEFAULT_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers["X-Correlation-ID"] = correlation_id
        return response


class RequestLatencyMiddleware(BaseHTTPMiddleware):
    """Records http_server_request_duration_seconds per route template."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        route = request.scope.get("route")
        observe_request_latency(
            request.method,
            getattr(route, "path", request.url.path),
            response.status_code,
            time.perf_counter() - started,
        )
        return response


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: Dishka container to resolve dependencies from. Defaults to
            the production container (Prisma, Redis, completion provider).

    Returns:
        FastAPI application instance
    """
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

    if container is None:
        # Deferred so the Prisma client is only imported when actually served
        from chat_storage.setup.ioc.container import create_container

        container = create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{Config.SERVICE_NAME} {Config.SERVICE_VERSION} started")
        yield
        # Drains the event publisher, then disconnects Prisma and Redis
        await container.close()
        logger.info(f"{Config.SERVICE_NAME} shutdown. DI container closed.")

    app = FastAPI(
        title=Config.SERVICE_NAME,
        description="Chat session and message storage with AI-generated replies",
        version=Config.SERVICE_VERSION,
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container, app)

    app.add_middleware(RequestLatencyMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"Request validation failed on {request.url.path}: {errors}")
        return JSONResponse(
            status_code=422,
            content={"error": "Validation error", "details": jsonable_errors(errors)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        else:
            logger.info(f"[HTTP {exc.status_code}] {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    # Storage failures and anything else unexpected end up here
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": f"Internal server error: {str(exc)}"},
        )

    @app.get("/", tags=["health"])
    async def root():
        return {
            "service": Config.SERVICE_NAME,
            "version": Config.SERVICE_VERSION,
            "message": "FastAPI server is running.",
        }

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    app.include_router(sessions_router)
    app.include_router(messages_router)
    app.include_router(metrics_router)

    return app


def jsonable_errors(errors) -> list[dict]:
    """Pydantic error dicts may carry exception objects in ctx."""
    return [
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in errors
    ]
