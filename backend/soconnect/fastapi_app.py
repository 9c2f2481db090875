"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Endpoints:
- POST /register, POST /login, POST /logout
- POST /messages, POST /upload
- GET /conversations, GET /conversations/{counterparty_code}
- DELETE /admin/users/{code}
- GET UPLOAD_URL_PREFIX/<file> (stored attachments)
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from soconnect import __version__
from soconnect.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from soconnect.config.settings import Config
from soconnect.domain.exceptions import (
    AttachmentTooLargeError,
    AuthError,
    ConflictError,
    DomainValidationError,
    EntityNotFoundError,
    TransientStoreError,
)
from soconnect.presentation.api import (
    admin_router,
    auth_router,
    conversations_router,
    messages_router,
    upload_router,
)
from soconnect.presentation.rate_limit import limiter
from soconnect.setup.ioc.container import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

logger = logging.getLogger(__name__)

# Most specific first; Starlette resolves handlers along the exception MRO
DOMAIN_ERROR_STATUS = {
    AttachmentTooLargeError: 413,
    DomainValidationError: 400,
    AuthError: 401,
    ConflictError: 400,
    EntityNotFoundError: 404,
}


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)

        response.headers["X-Correlation-ID"] = correlation_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: nothing to do, backends connect on first use.
    Shutdown: close the DI container (disconnects Prisma and Redis).
    """
    logger.info(
        f"[App] Started ({Config.APP_ENV}, storage={Config.STORAGE_BACKEND}, "
        f"sessions={Config.SESSION_BACKEND})"
    )
    yield
    await app.state.dishka_container.close()
    logger.info("[App] Shutdown complete, DI container closed")


def _register_exception_handlers(app: FastAPI) -> None:
    async def domain_exception_handler(request: Request, exc: Exception):
        status_code = next(
            code for cls, code in DOMAIN_ERROR_STATUS.items() if isinstance(exc, cls)
        )
        logger.info(f"[HTTP {status_code}] {exc.code}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "detail": exc.message},
        )

    for exc_class in DOMAIN_ERROR_STATUS:
        app.add_exception_handler(exc_class, domain_exception_handler)

    @app.exception_handler(TransientStoreError)
    async def transient_exception_handler(request: Request, exc: TransientStoreError):
        logger.warning(f"[HTTP 503] {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content={"error": exc.code, "detail": "Please try again"},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = jsonable_encoder(exc.errors())
        logger.debug(f"[HTTP 400] Request validation failed: {errors}")
        return JSONResponse(
            status_code=400,
            content={"error": "ValidationError", "details": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(
            f"[HTTP 500] Unhandled {type(exc).__name__} on "
            f"{request.method} {request.url.path}"
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: Dishka container to use; built from Config when omitted

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="SoConnect API",
        description="Two-party chat with code + passcode login",
        version=__version__,
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container or create_container(), app)

    # Rate limiting (login)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "SoConnect server is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy"}

    # Register routers
    app.include_router(auth_router)  # POST /register, /login, /logout
    app.include_router(messages_router)  # POST /messages
    app.include_router(upload_router)  # POST /upload
    app.include_router(conversations_router)  # GET /conversations[/{code}]
    app.include_router(admin_router)  # DELETE /admin/users/{code}

    os.makedirs(Config.UPLOAD_BASE, exist_ok=True)
    app.mount(
        Config.UPLOAD_URL_PREFIX,
        StaticFiles(directory=Config.UPLOAD_BASE, check_dir=False),
        name="uploads",
    )

    return app


# Create the app instance
app = create_fastapi_app()
