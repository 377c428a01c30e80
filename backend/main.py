# ruff: noqa: E402
# E402 disabled: load_dotenv() must run before other imports for Sentry DSN

import time
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

import sentry_sdk
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from core.correlation import (
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from core.logging_config import configure_logging
from core.sentry_config import init_sentry
from helpers.rate_limiter import limiter
from helpers.security_headers import SecurityHeadersMiddleware
from models.config import settings
from models.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    BusinessRuleException,
    ConflictException,
    DomainException,
    NotFoundException,
    PermissionDeniedException,
    ValidationException,
)
from repositories.database import Base, engine
from routers import admin_router, auth_router, catalog_router, reports_router

# Initialize Sentry BEFORE app creation
init_sentry()

# Configure logging with Loguru
configure_logging(settings.ENVIRONMENT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Optionally create tables when `AUTO_CREATE_DB` is enabled (development).
    """
    if settings.AUTO_CREATE_DB:
        import repositories.db_models  # noqa: F401  (registers tables on Base)

        logger.info(
            "AUTO_CREATE_DB enabled; creating database tables via SQLAlchemy create_all()"
        )
        Base.metadata.create_all(bind=engine)
    else:
        logger.info("AUTO_CREATE_DB disabled; skipping automatic create_all()")

    logger.info(f"{settings.PROJECT_NAME} API started", environment=settings.ENVIRONMENT)
    yield
    logger.info(f"{settings.PROJECT_NAME} API stopped")


app = FastAPI(title=f"{settings.PROJECT_NAME} API", lifespan=lifespan)

# Attach rate limiter to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Inject correlation ID into request context and Sentry."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request with correlation ID tracking."""
        # Check for incoming correlation ID (from frontend)
        correlation_id = (
            request.headers.get("X-Correlation-ID") or generate_correlation_id()
        )
        token = set_correlation_id(correlation_id)

        # Add to Sentry context
        sentry_sdk.set_tag("correlation_id", correlation_id)

        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        # Include in response headers
        response.headers["X-Correlation-ID"] = correlation_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all incoming requests with performance monitoring."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and log timing information."""
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        logger.info(
            f"{request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )

        # Warn on slow requests (configurable threshold)
        if duration > settings.SLOW_REQUEST_THRESHOLD:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {duration:.2f}s (threshold: {settings.SLOW_REQUEST_THRESHOLD}s)"
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        return response


# Middleware runs in reverse order of registration: security headers wrap everything
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)

# Configure CORS from environment settings
# In development, allow all origins for mobile/network testing
cors_origins = ["*"] if settings.ENVIRONMENT == "development" else settings.CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=settings.ENVIRONMENT != "development",
    allow_methods=["*"],
    allow_headers=["*"],
)


def _domain_error_response(
    request: Request,
    exc: DomainException,
    status_code: int,
    label: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Tag Sentry, log and serialize a domain exception."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.set_tag("exception_type", exc.__class__.__name__)

    # Positional arg keeps braces in user-supplied text away from loguru's format()
    logger.warning(
        label + ": {}",
        exc.message,
        correlation_id=exc.correlation_id,
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "correlation_id": exc.correlation_id,
        },
        headers=headers,
    )


# Global unhandled exception handler (returns generic 500 and logs details)
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch all unhandled exceptions with full Sentry capture."""
    correlation_id = get_correlation_id() or generate_correlation_id()

    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)

    # Use repr() to escape curly braces in exception message
    # (loguru's .format() interprets them as placeholders otherwise)
    logger.exception(
        f"Unhandled exception: {exc!r}",
        correlation_id=correlation_id,
        path=str(request.url.path),
        method=request.method,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "correlation_id": correlation_id,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Surface opaque storage failures as a generic 503."""
    correlation_id = get_correlation_id() or generate_correlation_id()

    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)

    logger.error(
        f"Storage backend failure: {exc.__class__.__name__}",
        correlation_id=correlation_id,
        path=str(request.url.path),
        method=request.method,
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Storage backend failure, please retry later",
            "correlation_id": correlation_id,
        },
    )


# Centralized exception handlers
@app.exception_handler(NotFoundException)
async def not_found_exception_handler(
    request: Request, exc: NotFoundException
) -> JSONResponse:
    """Handle not found exceptions with Sentry integration."""
    return _domain_error_response(request, exc, status.HTTP_404_NOT_FOUND, "Not found")


@app.exception_handler(AlreadyExistsException)
async def already_exists_exception_handler(
    request: Request, exc: AlreadyExistsException
) -> JSONResponse:
    """Handle already exists exceptions with Sentry integration."""
    return _domain_error_response(
        request, exc, status.HTTP_409_CONFLICT, "Already exists"
    )


@app.exception_handler(ConflictException)
async def conflict_exception_handler(
    request: Request, exc: ConflictException
) -> JSONResponse:
    """Handle conflict exceptions with Sentry integration."""
    return _domain_error_response(request, exc, status.HTTP_409_CONFLICT, "Conflict")


@app.exception_handler(ValidationException)
async def validation_exception_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    """Handle validation exceptions with Sentry integration."""
    return _domain_error_response(
        request, exc, status.HTTP_422_UNPROCESSABLE_CONTENT, "Validation error"
    )


@app.exception_handler(PermissionDeniedException)
async def permission_denied_exception_handler(
    request: Request, exc: PermissionDeniedException
) -> JSONResponse:
    """Handle permission denied exceptions with Sentry integration."""
    return _domain_error_response(
        request, exc, status.HTTP_403_FORBIDDEN, "Permission denied"
    )


@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(
    request: Request, exc: AuthenticationException
) -> JSONResponse:
    """Handle authentication exceptions; clients redirect to login on 401."""
    return _domain_error_response(
        request,
        exc,
        status.HTTP_401_UNAUTHORIZED,
        "Authentication failed",
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(BusinessRuleException)
async def business_rule_exception_handler(
    request: Request, exc: BusinessRuleException
) -> JSONResponse:
    """Handle business rule violations with Sentry integration."""
    return _domain_error_response(
        request, exc, status.HTTP_400_BAD_REQUEST, "Business rule violation"
    )


@app.exception_handler(DomainException)
async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Fallback for domain exceptions without a dedicated handler."""
    return _domain_error_response(
        request, exc, status.HTTP_400_BAD_REQUEST, "Domain error"
    )


app.include_router(auth_router.router, prefix="/api")
app.include_router(catalog_router.router, prefix="/api")
app.include_router(reports_router.router, prefix="/api")
app.include_router(admin_router.router, prefix="/api")


@app.get("/")
def root() -> dict:
    """Root endpoint."""
    return {"message": f"Welcome to {settings.PROJECT_NAME} API"}


@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}
