# ruff: noqa: E402
# E402 disabled: load_dotenv() must run before other imports for Sentry DSN

import os
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
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.middleware.base import BaseHTTPMiddleware

from core.correlation import (
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from core.logging_config import configure_logging
from core.sentry_config import init_sentry
from helpers.rate_limiter import limiter
from models.config import settings
from models.exceptions import (
    AuthenticationException,
    ConflictException,
    DomainException,
    NotFoundException,
    PermissionDeniedException,
    StoreUnavailableException,
    ValidationException,
)
from repositories.database import Base, SessionLocal, engine
from routers import (
    admin_router,
    announcements_router,
    auth_router,
    contacts_router,
    reports_router,
    users_router,
)

# Initialize Sentry BEFORE app creation
init_sentry()

# Configure logging with Loguru
configure_logging(os.getenv("ENVIRONMENT", "development"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Optionally create tables when `AUTO_CREATE_DB` is enabled (development).
    - Log the configured wards so a misconfigured deployment is obvious.
    """
    if settings.AUTO_CREATE_DB:
        logger.info(
            "AUTO_CREATE_DB enabled; creating database tables via SQLAlchemy create_all()"
        )
        Base.metadata.create_all(bind=engine)
    else:
        logger.info("AUTO_CREATE_DB disabled; run 'alembic upgrade head' to migrate")

    logger.info(f"Serving wards: {', '.join(settings.WARDS)}")
    yield
    logger.info("Shutting down")


app = FastAPI(title="WardWatch API", lifespan=lifespan)

# Attach rate limiter to app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Inject correlation ID into request context and Sentry."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        # Reuse the frontend's correlation ID when it sends one
        correlation_id = (
            request.headers.get("X-Correlation-ID") or generate_correlation_id()
        )
        set_correlation_id(correlation_id)
        sentry_sdk.set_tag("correlation_id", correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all incoming requests with performance monitoring."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()

        client_host = request.client.host if request.client else "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_host}")

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )

        if duration > settings.SLOW_REQUEST_THRESHOLD:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {duration:.2f}s (threshold: {settings.SLOW_REQUEST_THRESHOLD}s)"
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


# Middleware runs in reverse order of registration
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# In development, allow all origins for mobile/network testing
cors_origins = ["*"] if settings.ENVIRONMENT == "development" else settings.CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True if settings.ENVIRONMENT != "development" else False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global unhandled exception handler (returns generic 500 and logs details)
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch all unhandled exceptions with full Sentry capture."""
    correlation_id = get_correlation_id() or generate_correlation_id()

    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)

    # repr() escapes curly braces that loguru would treat as placeholders
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


# Centralized exception handlers. Starlette resolves a raised exception to
# the closest registered base class, so each family below covers its
# subclasses (ReportNotFoundException -> NotFoundException -> 404).
#
# family: (status code, log label, log level, capture in Sentry)
DOMAIN_EXCEPTION_RESPONSES: dict[type[DomainException], tuple[int, str, str, bool]] = {
    NotFoundException: (status.HTTP_404_NOT_FOUND, "Not found", "WARNING", False),
    ValidationException: (
        status.HTTP_422_UNPROCESSABLE_CONTENT,
        "Validation error",
        "WARNING",
        False,
    ),
    ConflictException: (status.HTTP_409_CONFLICT, "Conflict", "WARNING", False),
    # Auth failures are security-relevant
    AuthenticationException: (
        status.HTTP_401_UNAUTHORIZED,
        "Authentication failed",
        "WARNING",
        True,
    ),
    PermissionDeniedException: (
        status.HTTP_403_FORBIDDEN,
        "Permission denied",
        "WARNING",
        False,
    ),
    # Nothing was written, so the client may retry
    StoreUnavailableException: (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Store unavailable",
        "ERROR",
        True,
    ),
    DomainException: (status.HTTP_400_BAD_REQUEST, "Domain exception", "WARNING", True),
}


def _make_domain_handler(
    status_code: int, label: str, level: str, capture: bool
) -> Callable[[Request, DomainException], Awaitable[JSONResponse]]:
    async def handler(request: Request, exc: DomainException) -> JSONResponse:
        sentry_sdk.set_tag("exception_type", exc.__class__.__name__)
        if capture:
            sentry_sdk.capture_exception(exc)

        logger.log(
            level,
            f"{label}: {exc.message}",
            correlation_id=exc.correlation_id,
            exception_type=exc.__class__.__name__,
            path=str(request.url.path),
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=status_code,
            content={
                "detail": exc.message,
                "correlation_id": exc.correlation_id,
            },
            headers=headers,
        )

    return handler


for _exc_class, _response in DOMAIN_EXCEPTION_RESPONSES.items():
    app.add_exception_handler(_exc_class, _make_domain_handler(*_response))  # type: ignore[arg-type]


# Store failures outside a service's store_errors block, such as the user
# lookup in authentication, still reach the client as retryable 503s
async def store_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    correlation_id = get_correlation_id() or generate_correlation_id()
    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)
    logger.error(
        f"Store unavailable: {exc!r}",
        correlation_id=correlation_id,
        path=str(request.url.path),
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "The data store is temporarily unavailable. Please retry.",
            "correlation_id": correlation_id,
        },
    )


app.add_exception_handler(OperationalError, store_failure_handler)
app.add_exception_handler(InterfaceError, store_failure_handler)


app.include_router(auth_router.router, prefix="/api")
app.include_router(reports_router.router, prefix="/api")
app.include_router(announcements_router.router, prefix="/api")
app.include_router(contacts_router.router, prefix="/api")
app.include_router(users_router.router, prefix="/api")
app.include_router(admin_router.router, prefix="/api")


@app.get("/")
def root() -> dict:
    return {"message": "Welcome to WardWatch API"}


@app.get("/api/health")
def health_check() -> dict:
    """Health check endpoint; reports whether the database answers."""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.error(f"Health check database probe failed: {e}")
        database = "unavailable"
    finally:
        db.close()
    return {"status": "healthy" if database == "ok" else "degraded", "database": database}
