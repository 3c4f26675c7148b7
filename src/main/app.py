"""
HTTP Application - Main Layer

Builds the FastAPI application serving the unified status API. Logging is
configured at import time so that settings loading is already logged;
``uvicorn src.main.app:app`` and ``python -m src.main serve`` both use
the module-level ``app``.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.domain.entities.errors import (
    CatalogUnavailableError,
    DomainError,
    InvalidQueryError,
    UnknownSubsystemError,
)
from src.main.config import AppSettings, get_settings
from src.main.container import app_lifespan, init_container
from src.presentation.controllers import monitoring_router, system_router
from src.shared import configure_logging, get_logger, update_logging_from_settings

configure_logging()
update_logging_from_settings(get_settings())

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Record the start time used by /info and run the container lifecycle."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("app.startup", title=app.title, version=app.version)

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("app.shutdown")


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors escaping a controller onto a JSON error body."""
    if isinstance(exc, UnknownSubsystemError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, InvalidQueryError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, CatalogUnavailableError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.error("app.domain_error", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=code, content={"detail": exc.message, **exc.details})


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to wire the container with; loaded from the
            environment when omitted.
    """
    settings = settings or get_settings()
    init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # The dashboard pages are served from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DomainError, domain_error_handler)

    app.include_router(system_router)
    app.include_router(monitoring_router)

    return app


app = create_app()
