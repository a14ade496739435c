"""
Catalog API — FastAPI Application Factory
===========================================

What:  Builds the two read-only servers: the Star Wars lore API and the
       e-commerce catalog API.
How:   create_app(variant) assembles middleware, exception handlers and the
       variant's routers around one persistence handle. Both apps share the
       health and misc routers.
Who:   uvicorn (`catalog_api.main:lore_app`, `catalog_api.main:catalog_app`)
       and the test suite (create_app with a temporary database URL).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                FastAPI App (per variant)            │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ Sec. Headers │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌──────────────────────┐  │
    │  │ lore: episodes,      │ │ catalog: products,   │  │
    │  │       characters     │ │ categories, brands,  │  │
    │  │                      │ │ users, orders        │  │
    │  └──────────────────────┘ └──────────────────────┘  │
    │  shared: /health, /health/db, /api/hello, /api/echo │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the database URL and listening address
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from catalog_api import __version__
from catalog_api.config import settings
from catalog_api.database import Database
from catalog_api.exceptions import DatabaseError, NotFoundError, ValidationError
from catalog_api.middleware.logging import RequestLoggingMiddleware
from catalog_api.middleware.request_id import RequestIDMiddleware, request_id_var
from catalog_api.middleware.security_headers import DEFAULT_HEADERS, SecurityHeadersMiddleware
from catalog_api.routes import CATALOG_ROUTERS, LORE_ROUTERS, SHARED_ROUTERS

logger = logging.getLogger(__name__)

VARIANTS = {
    "lore": {
        "title": "Star Wars Lore API",
        "description": "Read-only API over Star Wars episodes, characters and their appearances.",
        "routers": LORE_ROUTERS,
    },
    "catalog": {
        "title": "E-commerce Catalog API",
        "description": (
            "Read-only API over a product catalog: products, categories, brands, "
            "suppliers, reviews, users and orders, with filtered and paginated search."
        ),
        "routers": CATALOG_ROUTERS,
    },
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configures the root logger once per process.

    Format: 2024-01-15T12:00:00 [INFO] catalog_api.access: GET /api/episodes 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-statement and per-request noise; our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if not settings.sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    database: Database = app.state.database
    logger.info("=" * 60)
    logger.info("%s starting up (v%s)", app.title, __version__)
    # Password is masked in the rendered URL
    logger.info("Database: %s", make_url(database.url).render_as_string(hide_password=True))
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("%s shutting down...", app.title)
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Maps exceptions to status codes and the `{error, details?}` body.

    Handler table:
        ValidationError         → 400
        RequestValidationError  → 400 (query parameter type/range failures)
        NotFoundError           → 404
        DatabaseError           → 500, endpoint message plus driver text
        Exception (fallback)    → 500 "Internal server error"
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.info("[%s] Rejected parameter: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        logger.info("[%s] Rejected parameter '%s': %s", request_id_var.get(""), field, first.get("msg"))
        return JSONResponse(
            status_code=400,
            content={"error": f"Invalid value for '{field}'", "details": first.get("msg", "")},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=exc.to_body())

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.details,
            exc.context,
        )
        return JSONResponse(status_code=500, content=exc.to_body())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, outside the middleware stack: the
        # request ID comes from request.state and the headers are added here
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        headers = dict(DEFAULT_HEADERS)
        if rid:
            headers["X-Request-ID"] = rid
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
            headers=headers,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(variant: str, database_url: Optional[str] = None) -> FastAPI:
    """
    Creates the FastAPI application for one server variant.

    Args:
        variant:       "lore" or "catalog"
        database_url:  Overrides the configured URL for this variant (tests)

    Raises:
        ValueError: unknown variant
    """
    if variant not in VARIANTS:
        raise ValueError(f"Unknown server variant '{variant}'. Must be 'lore' or 'catalog'")
    meta = VARIANTS[variant]

    app = FastAPI(
        title=meta["title"],
        description=meta["description"],
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.variant = variant
    app.state.database = Database(
        database_url or settings.database_url_for(variant),
        echo=settings.sql_echo,
        pool_pre_ping=settings.db_pool_pre_ping,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: SecurityHeaders runs first
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for router in meta["routers"]:
        app.include_router(router)
    for router in SHARED_ROUTERS:
        app.include_router(router)

    return app


# ── Application Instances ────────────────────────────────────────────────
# uvicorn catalog_api.main:lore_app     --port 3000
# uvicorn catalog_api.main:catalog_app  --port 3001
lore_app = create_app("lore")
catalog_app = create_app("catalog")
