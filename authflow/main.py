"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi.responses import JSONResponse

from authflow.core.config import get_settings
from authflow.domains.auth.factory import AuthServiceFactory
from authflow.exceptions import AuthException
from authflow.exceptions import BaseAppException
from authflow.routers.auth import router as auth_router
from authflow.utilities.enums import Environment


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log application startup and shutdown."""
    logger.info("Starting up application...")
    yield
    logger.info("Application shutdown complete")


async def app_exception_handler(_: Request, exc: BaseAppException) -> JSONResponse:
    """Handle all application exceptions with their status code and error kind."""
    content: dict[str, str] = {"detail": str(exc)}
    if isinstance(exc, AuthException):
        content["code"] = exc.code.value

    return JSONResponse(status_code=exc.status_code, content=content)


def create_app(auth_service_factory: AuthServiceFactory) -> FastAPI:
    """Create the FastAPI application serving the auth routes.

    Args:
        auth_service_factory: Builds the AuthService for each request, e.g.
            ``database_service_factory(...)`` or ``shared_service_factory(service)``.

    Returns:
        Configured FastAPI application.
    """
    settings = get_settings()
    show_docs = settings.environment != Environment.PRODUCTION

    app = FastAPI(
        title="authflow",
        description="Authentication orchestration API",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs" if show_docs else None,
        redoc_url=None,
        openapi_url="/openapi.json" if show_docs else None,
    )
    app.state.auth_service_factory = auth_service_factory

    # ─── Exception Handlers ────────────────────────────────────────────────
    app.add_exception_handler(BaseAppException, app_exception_handler)

    # ─── Routers ───────────────────────────────────────────────────────────
    @app.get("/health", include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {
            "status": "healthy",
            "environment": settings.environment,
        }

    app.include_router(auth_router)

    return app
