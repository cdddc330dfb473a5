"""
ChefNotes Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception handling
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn chefnotes.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────────┐ ┌─────────────┐  │
    │  │  Req ID  │→│ Convert Rate Lim │→│  Logging    │  │
    │  └──────────┘ └──────────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────┐ ┌────────────┐ ┌───────┐ ┌─────────┐   │
    │  │ recipes │ │ recordings │ │ notes │ │ convert │   │
    │  └─────────┘ └────────────┘ └───────┘ └─────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Synthesis→500│   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log readiness
    Shutdown: log shutdown (the store is in memory and simply goes away)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from chefnotes import __version__
from chefnotes.config import settings
from chefnotes.exceptions import (
    ChefNotesError,
    EmptyContentError,
    LLMServiceError,
    NotFoundError,
    RateLimitExceededError,
    SynthesisError,
    ValidationError,
)
from chefnotes.middleware.logging import RequestLoggingMiddleware
from chefnotes.middleware.rate_limit import ConversionRateLimitMiddleware
from chefnotes.middleware.request_id import RequestIDMiddleware, request_id_var
from chefnotes.routes import convert, health, notes, recipes, recordings

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole application.

    Format: 2024-01-15T12:00:00 [INFO] chefnotes.services.recipe_service: ...
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

    # These log every HTTP round trip at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("ChefNotes Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Recipe CRUD works without Gemini; only conversion needs the key
        logger.error("Configuration error: %s", str(e))

    logger.info("Gemini model: %s", settings.gemini_model)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ChefNotes Backend shutting down; in-memory recipes are discarded.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        RequestValidationError  → 400 (malformed body, non-numeric path id)
        ValidationError         → 400
        EmptyContentError       → 400
        NotFoundError           → 404
        RateLimitExceededError  → 429
        SynthesisError          → 500
        LLMServiceError         → 503
        ChefNotesError (base)   → 500
        Exception (fallback)    → 500

    Responses never include stack traces or provider error text.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Schema-level input errors use 400, like business-rule validation errors."""
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", "Invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Invalid request data", {"errors": errors}),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(EmptyContentError)
    async def handle_empty_content(request: Request, exc: EmptyContentError):
        return JSONResponse(
            status_code=400,
            content=_error_body("empty_content", exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return JSONResponse(
            status_code=429,
            content=_error_body("rate_limit_exceeded", exc.message, exc.context),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(SynthesisError)
    async def handle_synthesis_error(request: Request, exc: SynthesisError):
        """Gemini failed; the client may retry, which re-aggregates from scratch."""
        logger.error(
            "[%s] Synthesis error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("synthesis_failed", exc.message),
        )

    @app.exception_handler(LLMServiceError)
    async def handle_llm_error(request: Request, exc: LLMServiceError):
        logger.error("[%s] LLM service error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=503,
            content=_error_body("llm_service_error", exc.message),
        )

    @app.exception_handler(ChefNotesError)
    async def handle_app_error(request: Request, exc: ChefNotesError):
        logger.error(
            "[%s] Application error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An internal error occurred. Please try again later.",
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests call this for a fresh app (and fresh rate limiter state) per test.
    """
    app = FastAPI(
        title="ChefNotes API",
        description=(
            "Capture voice and text notes while cooking, then let Google Gemini "
            "turn them into a formatted recipe."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → ConversionRateLimit → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    # Recipe detail responses embed base64 audio and compress well
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ConversionRateLimitMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(recipes.router)
    app.include_router(recordings.router)
    app.include_router(notes.router)
    app.include_router(convert.router)
    app.include_router(health.router)

    return app


app = create_app()
