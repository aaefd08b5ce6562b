"""FastAPI application entry point."""

import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from .config import settings
from .logging_config import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from .routers import health_router, search_router
from .variations import EmptyQueryError

# Configure structured logging at application startup
configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    logger.info(
        "app.startup",
        app_name=settings.app_name,
        version=settings.app_version,
        max_variations=settings.max_variations,
        fanout_policy=settings.fanout_policy,
        templates=len(settings.search_url_templates),
    )

    yield

    logger.info("app.shutdown")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# When CORS_ALLOW_ALL=true, allows all origins (["*"])
# Otherwise, uses comma-separated CORS_ORIGINS list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id to the log context and echo it as X-Request-ID."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    bind_request_context(request_id, request.url.path)
    start = time.perf_counter()
    try:
        response = await call_next(request)
        logger.info(
            "request.completed",
            method=request.method,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_request_context()


@app.exception_handler(EmptyQueryError)
async def empty_query_handler(request: Request, exc: EmptyQueryError) -> PlainTextResponse:
    """Empty queries answer 400 with a plain text body, not the JSON detail shape."""
    return PlainTextResponse(str(exc), status_code=400)


app.include_router(health_router)
app.include_router(search_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Phrase Search Service API"}


def run() -> None:
    """Run the service with uvicorn on the configured host and port."""
    logger.info("app.server_starting", host=settings.host, port=settings.port)
    uvicorn.run(
        "phrase_search_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
