"""
Gebeta Backend: Application Factory
===================================

What:  Creates and configures the ASGI application.
How:   FastAPI is the host: lifespan, middleware chain and exception handlers.
       Every /api endpoint lives on the hand-written Router from build_router(),
       mounted at "/" as a plain ASGI app.
Who:   uvicorn (uvicorn app.main:app), the test suite.

    ┌───────────────────────────────────────────────────┐
    │                 FastAPI host                      │
    │  Middleware:  Request ID → Logging → CORS → GZip  │
    │  Exception handlers: GebetaError tree → envelope  │
    │  Mount "/":   Router (businesses, menu, reviews,  │
    │               applications, chat, health)         │
    └───────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, create missing tables
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine, init_models
from app.exceptions import (
    DatabaseError,
    ForbiddenError,
    GebetaError,
    InvalidInputError,
    LLMServiceError,
    NotFoundError,
)
from app.http.response import error_envelope, error_response
from app.middleware.cors import CORSMiddleware, CORSPolicy
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import build_router

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: 2026-01-15T12:00:00 [INFO] app.services.business_service: ...
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-operation chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Gebeta Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: only the affected features degrade
        logger.warning("%s", str(e))

    await init_models()
    logger.info("Database tables ready")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Gebeta Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto the failure envelope.

    Handler hierarchy:
        InvalidInputError  → 400 (InvalidPayloadError included)
        ForbiddenError     → 403
        NotFoundError      → 404
        DatabaseError      → 500, context logged only
        LLMServiceError    → 503
        GebetaError        → 500 catch-all for application errors
        Exception          → 500 unexpected_error, stack trace logged only

    The Exception handler runs in Starlette's ServerErrorMiddleware, outside
    CORSMiddleware, so it adds the CORS headers itself.
    """
    cors_policy = CORSPolicy(settings.cors_origins_list)

    @app.exception_handler(InvalidInputError)
    async def handle_invalid_input(request: Request, exc: InvalidInputError):
        logger.warning("[%s] Invalid input: %s", request_id_var.get(""), exc.message)
        return error_response(exc)

    @app.exception_handler(ForbiddenError)
    async def handle_forbidden(request: Request, exc: ForbiddenError):
        logger.warning("[%s] Forbidden: %s", request_id_var.get(""), exc.message)
        return error_response(exc)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(exc)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(exc)

    @app.exception_handler(LLMServiceError)
    async def handle_llm_error(request: Request, exc: LLMServiceError):
        logger.error(
            "[%s] Assistant error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(exc)

    @app.exception_handler(GebetaError)
    async def handle_gebeta_error(request: Request, exc: GebetaError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return error_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        origin = request.headers.get("origin")
        headers = None
        if origin is None or cors_policy.is_allowed(origin):
            headers = cors_policy.headers(origin)
        return JSONResponse(
            status_code=500,
            content=error_envelope(
                "unexpected_error",
                "An unexpected error occurred. Please try again later.",
            ),
            headers=headers,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Assemble the host application around a freshly built Router.

    FastAPI's generated docs are disabled: the API surface is defined by the
    Router, not by FastAPI path operations.
    """
    app = FastAPI(
        title="Gebeta API",
        description="Campus food discovery: businesses, menus, reviews and listings.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: Request ID → Logging → CORS → GZip → Router
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(CORSMiddleware, allow_origins=settings.cors_origins_list)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Mount the API Router ──────────────────────────────────────────────
    app.mount("/", build_router())

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
