"""
FastAPI Application Factory.
Creates and configures the FastAPI application with all routers, middleware, and DI.

Routers:
- auth, listings, uploads, conversations, messages
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dishka import AsyncContainer
from dishka.integrations.fastapi import setup_dishka
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from bookmybook import __version__
from bookmybook.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from bookmybook.config.settings import Config
from bookmybook.domain.exceptions import (
    AccessDeniedError,
    AuthError,
    ConfigError,
    EntityNotFoundError,
    StoreConflictError,
    StoreError,
    StoreNotFoundError,
    StorePreconditionError,
    UploadError,
    ValidationError,
)
from bookmybook.presentation.api import (
    auth_router,
    conversations_router,
    listings_router,
    messages_router,
    uploads_router,
)
from bookmybook.setup.ioc.container import create_container

# Setup logging
setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)

logger = logging.getLogger(__name__)

SETUP_IN_PROGRESS = "setup_in_progress"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    - Startup: container and Dishka are set up before the app starts
    - Shutdown: close the DI container (HTTP client, live queries, Firebase app)
    """
    logger.info("FastAPI application started. DI container initialized.")
    yield
    await app.state.dishka_container.close()
    logger.info("FastAPI application shutdown. DI container closed.")


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to HTTP status codes with {"error": ...} bodies."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.info(f"[VALIDATION ERROR] {details}")
        return _error(status.HTTP_400_BAD_REQUEST, "Validation error", details=details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(f"[HTTP ERROR {exc.status_code}] {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return _error(status.HTTP_401_UNAUTHORIZED, exc.message, code=exc.code)

    @app.exception_handler(AccessDeniedError)
    async def access_denied_handler(request: Request, exc: AccessDeniedError):
        return _error(status.HTTP_403_FORBIDDEN, str(exc))

    @app.exception_handler(EntityNotFoundError)
    async def not_found_handler(request: Request, exc: EntityNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(StoreNotFoundError)
    async def store_not_found_handler(request: Request, exc: StoreNotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(UploadError)
    async def upload_error_handler(request: Request, exc: UploadError):
        logger.error(f"[UPLOAD ERROR] {exc}")
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(StoreConflictError)
    async def store_conflict_handler(request: Request, exc: StoreConflictError):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(StorePreconditionError)
    async def precondition_handler(request: Request, exc: StorePreconditionError):
        logger.warning(f"[STORE SETUP] {exc}")
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            str(exc),
            state=SETUP_IN_PROGRESS,
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error(f"[STORE ERROR] {type(exc).__name__}: {exc}")
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError):
        logger.error(f"[CONFIG ERROR] {exc}: {', '.join(exc.missing)}")
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE, str(exc), missing=list(exc.missing)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"[GLOBAL ERROR] {type(exc).__name__}: {exc}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Internal server error: {str(exc)}",
        )


def create_fastapi_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        container: DI container to use; a default one is created when omitted

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="BookMyBook API",
        description="Second-hand book marketplace with buyer/seller messaging",
        version=__version__,
        lifespan=lifespan,
    )

    # Setup Dishka BEFORE app starts (must add middleware before startup)
    setup_dishka(container or create_container(), app)

    # Correlation ID middleware (must be added before CORS)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Health check routes
    @app.get("/", tags=["health"])
    async def root():
        return {"message": "BookMyBook API is running."}

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy", "store": Config.STORE_BACKEND}

    # Register routers
    app.include_router(auth_router)
    app.include_router(listings_router)
    app.include_router(uploads_router)  # POST /uploads/image
    app.include_router(conversations_router)
    app.include_router(messages_router)

    return app


# Create the app instance
app = create_fastapi_app()
