"""
String Analyzer Service - FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`string_analyzer.main:app`), by __main__.py, and
       by the test suite with an injected store.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────────────────┐ ┌─────────────────┐ │
    │  │ /strings (CRUD + filters)  │ │ /health, /      │ │
    │  └────────────────────────────┘ └─────────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400/422 │ Duplicate→409 │ NotFound→404  │
    │  Storage→500        │ RequestValidation→400         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, load the store from its backend
    Shutdown: close the store's backend
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer import __version__
from string_analyzer.config import Settings, settings as default_settings
from string_analyzer.exceptions import StorageError, StringAnalyzerError
from string_analyzer.middleware.logging import RequestLoggingMiddleware
from string_analyzer.middleware.request_id import RequestIDMiddleware, request_id_var
from string_analyzer.routes import health, strings
from string_analyzer.services.backends import build_backend
from string_analyzer.services.store import StringStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger for the whole application.

    Format: 2024-01-15T12:00:00 [INFO] string_analyzer.services.store: Stored string ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    setup_logging(config.log_level)
    logger.info("String Analyzer Service starting up (backend=%s)", config.storage_backend)

    store: StringStore = app.state.store
    if not store.loaded:
        # A malformed data file aborts startup instead of being overwritten
        await store.load()

    logger.info("Server ready at http://%s:%d", config.host, config.port)

    yield

    logger.info("String Analyzer Service shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, code: str, details: Optional[dict] = None) -> dict:
    body = {"error": message, "code": code, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP status codes and the shared error body.

    Handler hierarchy:
        StorageError              → 500 (generic message, details logged)
        StringAnalyzerError (any) → exc.status_code (400/404/409/422)
        RequestValidationError    → 400 (bad query parameter or body types)
        HTTPException             → its own status (unknown route, 405)
        Exception (fallback)      → 500
    """

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                "An internal error occurred. Please try again later.", exc.code
            ),
        )

    @app.exception_handler(StringAnalyzerError)
    async def handle_application_error(request: Request, exc: StringAnalyzerError):
        rid = request_id_var.get("")
        logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Invalid query parameter values or types",
                "validation_error",
                {"errors": errors},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred.", "internal_server_error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Optional[Settings] = None,
    store: Optional[StringStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use (defaults to the module-level singleton).
        store: Pre-built store; when omitted one is built from
               config.storage_backend and loaded during startup.
    """
    config = config if config is not None else default_settings

    app = FastAPI(
        title="String Analyzer Service",
        description=(
            "Stores strings, computes their properties (length, palindrome, "
            "unique characters, word count, SHA-256, character frequency) and "
            "supports lookup, filtered listing and deletion."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = store if store is not None else StringStore(build_backend(config))

    # Middleware executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(strings.router)
    app.include_router(health.router)

    return app


app = create_app()
