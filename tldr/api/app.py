from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from tldr import __version__
from tldr.api.routers import meta_router, summaries_router
from tldr.core.config import Settings, get_settings
from tldr.core.errors import AppError
from tldr.core.handlers import handle_app_error, handle_validation_error
from tldr.core.logging import setup_logging
from tldr.core.middleware import log_requests


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory for creating FastAPI instances.

    Args:
        settings: Optional settings override. If None, loads from environment.
                  Useful for testing with custom configuration.
    """
    if settings is None:
        settings = get_settings()

    middleware: list[Middleware] = []
    if settings.cors_allow_origins:
        middleware.append(
            Middleware(
                CORSMiddleware,
                allow_origins=settings.cors_allow_origins,
                allow_methods=["GET", "POST"],
                allow_headers=["*"],
                expose_headers=["X-Request-Id"],
            )
        )

    app = FastAPI(
        title="TLDR",
        description="Instant AI-powered article summaries",
        version=__version__,
        middleware=middleware,
    )
    app.include_router(meta_router)
    app.include_router(summaries_router)
    app.state.settings = settings

    app.add_middleware(BaseHTTPMiddleware, dispatch=log_requests)
    app.add_exception_handler(AppError, handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_validation_error)  # type: ignore[arg-type]

    return app


# Initialize logging once at module load
setup_logging()

# Default app instance for uvicorn (uvicorn tldr.api.app:app)
app = create_app()
