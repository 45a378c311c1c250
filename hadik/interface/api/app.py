"""FastAPI application."""

from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logfire

from hadik.adapter.error import IdentityStoreError, IdentityStoreUnavailableError
from hadik.config import Settings
from hadik.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
    PartialFailureError,
    ValidationError,
)
from hadik.interface.api.routes import (
    audit,
    auth,
    health,
    invitations,
    join_requests,
    members,
    permissions,
)
from hadik.interface.error import NotAuthenticatedError
from hadik.util.di.container import create_container, setup_di
from hadik.util.logging import setup_logging
from hadik.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_error_handlers(app: FastAPI) -> None:
    """Map layered errors to HTTP responses.

    Identity Store messages are never echoed; callers see a generic detail.
    """

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated(request: Request, exc: NotAuthenticatedError):
        return _error(status.HTTP_401_UNAUTHORIZED, str(exc))

    @app.exception_handler(NotAuthorizedError)
    async def not_authorized(request: Request, exc: NotAuthorizedError):
        return _error(status.HTTP_403_FORBIDDEN, f"Not authorized to {exc.action}")

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(BusinessRuleViolationError)
    async def business_rule(request: Request, exc: BusinessRuleViolationError):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict(request: Request, exc: ConflictError):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(PartialFailureError)
    async def partial_failure(request: Request, exc: PartialFailureError):
        logfire.error(
            "Partial failure",
            operation=exc.operation,
            completed_step=exc.completed_step,
            error=str(exc.cause),
        )
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(exc))

    @app.exception_handler(IdentityStoreUnavailableError)
    async def identity_unavailable(request: Request, exc: IdentityStoreUnavailableError):
        logfire.error("Identity Store unavailable", error=str(exc))
        return _error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Authentication service unavailable, please retry",
        )

    @app.exception_handler(IdentityStoreError)
    async def identity_rejected(request: Request, exc: IdentityStoreError):
        logfire.warn("Identity Store rejected request", kind=exc.kind.value, error=str(exc))
        return _error(
            status.HTTP_400_BAD_REQUEST, "The authentication service rejected the request"
        )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it without sending.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()
    setup_logging(settings)

    # Logfire must be configured before instrumentation
    instrument_httpx()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.dishka_container.close()

    app_instance = FastAPI(
        title="Hadik Admission API",
        description="Workspace admission control: allow-list, join requests, invitations and roles",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=[
            "Content-Length",
            "Content-Type",
            "Content-Disposition",
            "Retry-After",
        ],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(join_requests.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(members.router)
    app_instance.include_router(permissions.router)
    app_instance.include_router(audit.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()
