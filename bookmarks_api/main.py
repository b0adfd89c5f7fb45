"""
Bookmarks Service — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance; `app = create_app()` at the bottom serves
       `uvicorn bookmarks_api.main:app`.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────────────────┐ ┌──────┐ │
    │  │ Req ID   │→│ Logging  │→│ Security headers │→│ CORS │ │
    │  └──────────┘ └──────────┘ └──────────────────┘ └──────┘ │
    │                                                          │
    │  Routes:                                                 │
    │  ┌──────────────────────────────┐ ┌───────────────────┐  │
    │  │ /bookmarks, /bookmarks/{id}  │ │ GET /health       │  │
    │  └──────────────────────────────┘ └───────────────────┘  │
    │                                                          │
    │  Exception Handlers:                                     │
    │  Validation→400 │ Auth→401 │ NotFound→404 │ Storage→500  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, report missing configuration
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookmarks_api import __version__
from bookmarks_api.config import Settings, settings as default_settings
from bookmarks_api.database import build_engine, build_session_factory, dispose_engine
from bookmarks_api.exceptions import (
    AuthenticationError,
    BookmarksError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from bookmarks_api.middleware.logging import RequestLoggingMiddleware
from bookmarks_api.middleware.request_id import RequestIDMiddleware, request_id_var
from bookmarks_api.middleware.security_headers import SecurityHeadersMiddleware
from bookmarks_api.routes import bookmarks, health

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


def error_body(message: str) -> dict:
    """The `{"error": {"message": ...}}` envelope shared by every error response."""
    return {"error": {"message": message}}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Sinks:  stdout always; `settings.log_file` as well when set.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=handlers,
        force=True,
    )

    # Third-party loggers that report every connection and query
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("Bookmarks service %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health stays reachable and /bookmarks answers 401.
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Bookmarks service shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        ValidationError         → 400 (field-specific message)
        RequestValidationError  → 404 for unparseable ids, 400 for bodies
        AuthenticationError     → 401
        NotFoundError           → 404 "Bookmark Not Found"
        StorageError            → 500 (generic message)
        BookmarksError (base)   → 500 (generic message)
        Exception (fallback)    → 500 (generic message)

    Server-side details (context, stack traces) go to the log only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        # BookmarkService has already logged the rejection
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        # A path id that is not an integer can never name a stored bookmark.
        if any(error.get("loc", ("",))[0] == "path" for error in errors):
            logger.warning("[%s] Bookmark with id %s not found.", rid, request.url.path)
            return JSONResponse(status_code=404, content=error_body(NotFoundError().message))

        logger.warning("[%s] Malformed request body: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content=error_body("Request body must be a JSON object"),
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=401,
            content=error_body(exc.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=error_body(GENERIC_SERVER_ERROR))

    @app.exception_handler(BookmarksError)
    async def handle_application_error(request: Request, exc: BookmarksError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=error_body(GENERIC_SERVER_ERROR))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=error_body(GENERIC_SERVER_ERROR))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration for this instance. Defaults to the settings
                  loaded from the environment.

    The engine, session factory and settings live on `app.state`; nothing
    below the factory reads process-wide configuration.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Bookmarks API",
        description="Create, read, update and delete bookmarks (title, URL, description, rating 0-5).",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → SecurityHeaders → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(bookmarks.router)
    app.include_router(health.router)

    return app


app = create_app()
