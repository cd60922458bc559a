"""FastAPI application factory and dependency injection setup."""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from currency_converter.api.limiter import limiter
from currency_converter.api.routes import (
    converter_router,
    currency_router,
    health_router,
    log_router,
)
from currency_converter.config import get_settings
from currency_converter.container import get_container, reset_container
from currency_converter.exceptions import (
    CurrencyConverterError,
    RateLimitExceededError,
)
from currency_converter.logging_config import (
    bind_request_context,
    clear_context,
    configure_logging,
    get_logger,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown.

    Initializes logging and the DI container on startup,
    closes the upstream HTTP client on shutdown.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
        port=settings.api_port,
    )

    get_container()

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")
    await reset_container()
    logger.info("application_stopped")


async def log_request_middleware(request: Request, call_next):
    """Middleware to add request context to logs."""
    request_id = str(uuid.uuid4())[:8]
    bind_request_context(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client=request.client.host if request.client else None,
    )

    try:
        response = await call_next(request)
        logger.debug(
            "request_completed",
            status_code=response.status_code,
        )
        return response
    finally:
        clear_context()


async def exception_handler(
    request: Request, exc: CurrencyConverterError
) -> JSONResponse:
    """Handle domain exceptions and return appropriate JSON responses."""
    logger.warning(
        "domain_exception",
        error_code=exc.error_code,
        message=exc.message,
        context=exc.context,
    )
    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.context["retry_after"])}
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Render a slowapi rejection as a domain RateLimitExceededError."""
    error = RateLimitExceededError(
        get_remote_address(request), exc.limit.limit.get_expiry()
    )
    return await exception_handler(request, error)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Live currency conversion backed by a cached upstream rate provider",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add middleware
    app.middleware("http")(log_request_middleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting
    app.state.limiter = limiter

    # Add exception handlers
    app.add_exception_handler(CurrencyConverterError, exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Include routers
    app.include_router(health_router)
    app.include_router(currency_router)
    app.include_router(converter_router)
    app.include_router(log_router)

    return app


# Create app instance for uvicorn
app = create_app()
