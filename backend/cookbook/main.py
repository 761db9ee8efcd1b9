"""
Cookbook Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn cookbook.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │    /recipes  /ingredients  /units  /users  /login   │
    │    /comments /uploadImage  /images /initRecipes     │
    │    /health                                          │
    │                                                     │
    │  Exception Handlers (one envelope):                 │
    │    Validation→400 │ AccessDenied→403 │ NotFound→404 │
    │    Database/File→500 │ anything else→500            │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the engine and session factory (kept on app.state)
    3. Create the image directory
    4. Seed ingredients and units if their tables are empty
    Shutdown:
    1. Dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from cookbook import __version__
from cookbook.config import settings
from cookbook.database import build_engine, build_session_factory
from cookbook.exceptions import (
    AccessDeniedError,
    CookbookError,
    DatabaseError,
    FileStorageError,
    NotFoundError,
    ValidationError,
)
from cookbook.middleware.logging import RequestLoggingMiddleware
from cookbook.middleware.request_id import RequestIDMiddleware, request_id_var
from cookbook.routes import catalog, health, images, recipes, seed, users
from cookbook.services.seed_service import SeedService
from cookbook.services.store import DocumentStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole application.

    Format: 2024-01-15T12:00:00 [INFO] cookbook.services.search_service: ...
    Called once, first thing in the lifespan.
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
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

async def seed_catalog(app: FastAPI) -> None:
    """Insert the bundled ingredients/units into empty tables; never fatal."""
    try:
        async with app.state.session_factory() as session:
            seeder = SeedService(DocumentStore(session), settings.seed_file)
            await seeder.seed_catalog_if_empty()
            await session.commit()
    except (CookbookError, OSError, ValueError) as e:
        logger.error("Catalog seed failed: %s", str(e))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Cookbook Backend %s starting up...", __version__)

    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    settings.image_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Image directory: %s", settings.image_dir.resolve())

    if settings.seed_on_startup:
        await seed_catalog(app)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Cookbook Backend shutting down...")
    await app.state.engine.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Build the single error envelope used by every handler below."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "details": details,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the common envelope.

    Handler hierarchy:
        ValidationError / RequestValidationError  → 400
        AccessDeniedError                         → 403
        NotFoundError                             → 404
        DatabaseError / FileStorageError          → 500 (generic message)
        CookbookError (base)                      → 500
        Exception (fallback)                      → 500

    5xx responses never carry internal details; those are logged only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # Unknown fields, wrong types and malformed ids all land here
        logger.warning("[%s] Request rejected: %d schema error(s)", request_id_var.get(""), len(exc.errors()))
        return error_response(
            400,
            "validation_error",
            "The request is malformed or contains unknown fields",
            {"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(AccessDeniedError)
    async def handle_access_denied(request: Request, exc: AccessDeniedError):
        logger.warning("[%s] Access denied: %s", request_id_var.get(""), exc.context)
        return error_response(403, "access_denied", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(CookbookError)
    async def handle_cookbook_error(request: Request, exc: CookbookError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Cookbook API",
        description=(
            "Recipe catalog: recipes, ingredients, units, users and comments, "
            "with a faceted recipe search."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(recipes.router)
    app.include_router(catalog.ingredients_router)
    app.include_router(catalog.units_router)
    app.include_router(users.users_router)
    app.include_router(users.comments_router)
    app.include_router(images.router)
    app.include_router(seed.router)
    app.include_router(health.router)

    return app


app = create_app()
