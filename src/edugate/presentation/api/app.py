"""FastAPI application factory.

Creates and configures the FastAPI application with the auth router,
middleware, and exception handlers.

All endpoints live under the /api prefix that the school registry front
end calls. The health check endpoint stays at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from edugate.presentation.api.dependencies import create_tables, get_engine
from edugate.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from edugate.presentation.api.routers import auth_router
from edugate_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the edugate application with:
    - Console output with timestamps and module names
    - Configurable log level for edugate modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("edugate").setLevel(log_level)
    logging.getLogger("edugate_identity").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_PREFIX = "/api"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Registration, login and server-side sessions.

**Registration & Login:**
- Register accounts in a school that exists in the registry
- Login opens a session carried by an HttpOnly cookie
- checkSession returns the session profile or null

**Security:**
- Passwords are hashed with bcrypt
- Only a hash of the session id is stored server side
""",
    },
]


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("Starting EduGate API v%s...", API_VERSION)
    engine = get_engine()
    await _init_database(engine, get_settings().create_schema_on_startup)
    yield
    # Shutdown - dispose the shared engine and its connection pool
    logger.info("Shutting down EduGate API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database(engine: AsyncEngine, create_schema: bool) -> None:
    """Create the schema (if enabled) and verify connectivity.

    An unreachable database stops the process with exit status 1.
    """
    try:
        if create_schema:
            logger.info("Initializing database schema...")
            await create_tables(engine)
            logger.info("Database schema initialized successfully")
        else:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError):
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_api_router() -> APIRouter:
    """Create the API router with all endpoints.

    Returns
    -------
    APIRouter with all endpoints mounted.
    """
    api_router = APIRouter()
    api_router.include_router(auth_router, tags=["Authentication"])
    return api_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    # Configure logging on first app creation (not on module import)
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Registration, login and sessions for the school registry.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # Configure CORS; the session cookie needs credentialed requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_api_router(), prefix=API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Returns service status and version info.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    return app


# Application instance for uvicorn
app = create_app()
