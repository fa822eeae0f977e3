"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rolebridge.core.config import get_settings
from rolebridge.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from rolebridge.domain.exceptions import (
    DuplicateKey,
    MediationError,
    NotFound,
    ReferenceInUse,
    ReferenceNotFound,
    StoreUnavailable,
    UnknownTool,
    ValidationFailed,
)
from rolebridge.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)

ERROR_STATUS_CODES: dict[type[MediationError], int] = {
    ValidationFailed: 400,
    ReferenceNotFound: 400,
    NotFound: 404,
    UnknownTool: 404,
    DuplicateKey: 409,
    ReferenceInUse: 409,
    StoreUnavailable: 503,
}


def status_code_for(exc: MediationError) -> int:
    """HTTP status for a domain error, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()

    configure_logging(settings)
    logger.info(
        "Starting RoleBridge",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down RoleBridge")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Role and user management with a tool-call gateway",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check including database connectivity.

        Returns 503 when the database cannot be reached.
        """
        db_healthy = await get_db_manager().check_connection()
        body = {
            "status": "healthy" if db_healthy else "unhealthy",
            "service": "RoleBridge",
            "version": get_settings().app_version,
            "database": "connected" if db_healthy else "disconnected",
        }
        if db_healthy:
            return body
        return JSONResponse(status_code=503, content=body)


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from rolebridge.infrastructure.api.routes import (
        roles_router,
        seed_router,
        tools_router,
        users_router,
    )

    settings = get_settings()

    app.include_router(roles_router, prefix=f"{settings.api_prefix}/roles", tags=["roles"])
    app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["users"])
    app.include_router(seed_router, prefix=f"{settings.api_prefix}/seed", tags=["seed"])
    app.include_router(tools_router, prefix=f"{settings.api_prefix}/tools", tags=["tools"])

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Domain errors keep their message; anything else becomes a generic 500.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(MediationError)
    async def mediation_error_handler(request: Request, exc: MediationError):
        """Map a domain error to its status code and an error body."""
        status_code = status_code_for(exc)
        log = logger.warning if status_code >= 500 else logger.info
        log(
            "Request failed",
            path=str(request.url.path),
            method=request.method,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=exc.message,
        )
        content: dict = {"error": exc.message}
        if isinstance(exc, ValidationFailed):
            content["violations"] = [
                {"field": v.field, "message": v.message, "code": v.code}
                for v in exc.violations
            ]
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 with wire field names."""
        violations = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body")
                or "body",
                "message": error["msg"],
                "code": error["type"],
            }
            for error in exc.errors()
        ]
        logger.info(
            "Request validation failed",
            path=str(request.url.path),
            fields=[v["field"] for v in violations],
        )
        return JSONResponse(
            status_code=400,
            content={
                "error": "; ".join(f"{v['field']}: {v['message']}" for v in violations),
                "violations": violations,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": str(exc) if get_settings().debug else "Internal server error",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Log every request and bind a correlation ID to its context."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
