"""
ShopDesk Backend: FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own Store built from the given Settings.
Who:   Called by uvicorn (`uvicorn shopdesk.main:app`), `python -m shopdesk`
       and the test suite (with test Settings).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐             │
    │  │ Req ID   │→│ Logging  │→│  CORS    │             │
    │  └──────────┘ └──────────┘ └──────────┘             │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌────────┐  │
    │  │ products │ │  users   │ │  bills   │ │ pages  │  │
    │  └──────────┘ └──────────┘ └──────────┘ └────────┘  │
    │  + StaticFiles mounted at / for everything else     │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/Conflict→400 │ Auth→401 │ NotFound→404  │
    │  Database→500            │ anything else→500        │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create missing tables (idempotent)
    3. Log the listening address

    Shutdown:
    1. Dispose the store engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from shopdesk import __version__
from shopdesk.config import Settings, settings as default_settings
from shopdesk.database import Store
from shopdesk.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from shopdesk.middleware.logging import RequestLoggingMiddleware
from shopdesk.middleware.request_id import RequestIDMiddleware, request_id_var
from shopdesk.routes import bills, pages, products, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before the schema step, so that schema
    creation is logged too.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs each request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if app_settings.log_level == "DEBUG" else logging.WARNING
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then schema creation, then serve.
    Shutdown: dispose the store engine.

    The schema step runs to completion before the first request is
    accepted; a failure here aborts startup.
    """
    app_settings: Settings = app.state.settings
    store: Store = app.state.store

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings)
    logger.info("ShopDesk Backend %s starting up...", __version__)

    await store.create_schema()

    logger.info("Server running on port %d", app_settings.port)
    logger.info("Server is accessible at http://localhost:%d", app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ShopDesk Backend shutting down...")
    await store.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler table:
        ValidationError      → 400 {"message"}
        ConflictError        → 400 {"message"}
        AuthenticationError  → 401 {"success": false, "message"}
        NotFoundError        → 404 {"error"}
        DatabaseError        → 500 {"error": <driver error text>}
        Exception (fallback) → 500 generic message, traceback logged
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={"message": exc.message, "request_id": rid},
        )

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=400,
            content={"message": exc.message, "request_id": rid},
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=401,
            content={"success": False, "message": exc.message},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """The driver message goes back to the client verbatim."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app from. Defaults to the
                      environment-driven module settings; tests pass their own.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="ShopDesk API",
        description="Inventory, user and bills backend for the ShopDesk storefront.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = Store(
        app_settings.database_url,
        echo=app_settings.log_level == "DEBUG",
        pool_pre_ping=app_settings.db_pool_pre_ping,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → routes

    # Authorization is accepted for browser clients but never checked
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pages.router)
    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(bills.router)

    # Must come after the routers: a mount at "/" matches every path
    static_dir = Path(app_settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")
    else:
        logger.warning("Static directory %s not found; static assets disabled", static_dir)

    return app


# uvicorn expects `shopdesk.main:app` to be importable
app = create_app()
