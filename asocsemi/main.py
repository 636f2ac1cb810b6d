"""
ASOCSEMI website - FastAPI application entry point.

Server-rendered pages plus a JSON API under /api/v1, backed by a hosted
backend-as-a-service for auth, tables and file storage.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from asocsemi.api.routes import api_router
from asocsemi.core.backend import DataBackend, create_backend
from asocsemi.core.config import settings
from asocsemi.core.exceptions import APIException
from asocsemi.core.logging import RequestIDMiddleware, get_logger, setup_logging
from asocsemi.core.oauth import GoogleSignIn
from asocsemi.core.rate_limit import limiter
from asocsemi.schemas.auth import AuthEvent, AuthUser
from asocsemi.services.identity_service import IdentityProvider
from asocsemi.web.pages import router as pages_router

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "web" / "static"


def _log_session_change(event: AuthEvent, user: Optional[AuthUser]) -> None:
    logger.info("session_changed", auth_event=event.value, user_id=user.id if user else None)


def create_app(backend: Optional[DataBackend] = None) -> FastAPI:
    """
    Build the application.

    A backend may be passed in (tests use an in-memory one); otherwise the
    variant is picked from settings at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - startup and shutdown."""
        setup_logging()
        logger.info("starting_app", app_name=settings.app_name, env=settings.environment)

        data_backend = backend or create_backend(settings)

        identity = IdentityProvider(data_backend, settings)
        unsubscribe = identity.subscribe(_log_session_change)
        await identity.start()

        app.state.backend = data_backend
        app.state.identity = identity
        app.state.google_sign_in = GoogleSignIn(settings)

        yield

        logger.info("shutting_down")
        unsubscribe()
        await identity.close()
        await data_backend.aclose()

    app = FastAPI(
        title=settings.app_name,
        description="ASOCSEMI company website and API",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Request ID correlation
    app.add_middleware(RequestIDMiddleware)

    # CORS middleware - explicit methods and headers, not wildcards
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions - log full detail, return sanitized message."""
        logger.error(
            "unhandled_exception",
            exc_type=type(exc).__name__,
            exc_message=str(exc),
            path=request.url.path,
            exc_info=True,
        )

        if settings.debug:
            return JSONResponse(
                status_code=500,
                content={
                    "error": "internal_error",
                    "message": str(exc),
                },
            )

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
            },
        )

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(pages_router)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "asocsemi.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
