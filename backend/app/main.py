"""
Programmers Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌────────────┐  │
    │  │ Req ID   │→│ Logging  │→│ XSRF │→│ GZip, CORS │  │
    │  └──────────┘ └──────────┘ └──────┘ └────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌─────────┐ ┌─────────────┐   │
    │  │ /api/programmers │ │ GET /   │ │ GET /health │   │
    │  └──────────────────┘ └─────────┘ └─────────────┘   │
    │  Static: /static (Angular app.js + partials)        │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Body→400 │ Fields→422 │ 404 │ 415 │ DB→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app import __version__
from app.config import settings
from app.database import create_tables, dispose_engine
from app.exceptions import (
    ProgrammersError,
    ValidationError,
    FieldValidationError,
    UnsupportedMediaTypeError,
    NotFoundError,
    DatabaseError,
)
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.xsrf import XsrfMiddleware
from app.routes import health, pages, programmers

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Validate configuration (logged, not fatal: /health keeps answering)
        3. Create tables when AUTO_CREATE_TABLES is set
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Programmers backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info(
        "XSRF protection: %s (cookie %s, header %s)",
        "on" if settings.xsrf_enabled else "OFF",
        settings.xsrf_cookie_name,
        settings.xsrf_header_name,
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Programmers backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _envelope(error: str, message: str, rid: str, details: dict = None) -> dict:
    content = {"error": error, "message": message, "request_id": rid}
    if details:
        content["details"] = details
    return content


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        ValidationError            → 400 Bad Request (body unreadable)
        FieldValidationError       → 422 bare {field: [messages]} map
        NotFoundError              → 404 Not Found
        UnsupportedMediaTypeError  → 415 Unsupported Media Type
        DatabaseError              → 500 (generic message)
        ProgrammersError (base)    → 500
        Exception (fallback)       → 500 (traceback logged, never returned)

    XSRF rejections never get here: XsrfMiddleware answers 403 itself.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content=_envelope("validation_error", exc.message, rid, exc.context),
        )

    @app.exception_handler(FieldValidationError)
    async def handle_field_validation_error(request: Request, exc: FieldValidationError):
        # Bare mapping so the Angular form can bind each list to its field
        rid = request_id_var.get("")
        logger.info("[%s] %s", rid, exc.message)
        return JSONResponse(status_code=422, content=exc.errors)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content=_envelope("not_found", exc.message, rid),
        )

    @app.exception_handler(UnsupportedMediaTypeError)
    async def handle_unsupported_media_type(request: Request, exc: UnsupportedMediaTypeError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=415,
            content=_envelope("unsupported_media_type", exc.message, rid),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_envelope(
                "server_error", "An internal error occurred. Please try again later.", rid
            ),
        )

    @app.exception_handler(ProgrammersError)
    async def handle_application_error(request: Request, exc: ProgrammersError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_envelope("server_error", exc.message, rid),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_envelope(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
                rid,
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition; the last one added
    (RequestIDMiddleware) sees the request first.
    """
    app = FastAPI(
        title="Programmers API",
        description=(
            "REST resource for programmer records, consumed by an Angular.js "
            "single-page client. Bodies may be JSON or form-encoded; mutating "
            "requests need the X-XSRF-TOKEN header."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "X-Total-Count",
            "Location",
        ],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(XsrfMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(programmers.router)
    app.include_router(pages.router)
    app.include_router(health.router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_app()
