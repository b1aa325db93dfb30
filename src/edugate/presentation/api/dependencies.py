"""FastAPI dependency injection for the EduGate API.

Provides dependencies for:
- Database engine, session maker and per-request sessions
- Schema management (create/drop tables)
- Service instances (password hashing, sessions, authentication)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from edugate.presentation.api.config import get_api_settings
from edugate_config.settings import Settings, get_settings
from edugate_identity import (
    AuthenticationService,
    PasswordHashingService,
    SessionManager,
)
from edugate_identity.infrastructure.persistence.sqlalchemy import (
    CredentialStoreSQLAlchemy,
    IdentityBase,
    SessionRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for file-based SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused across all requests.

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


def reset_engine() -> None:
    """Forget the cached engine, session maker and URL (CLI and tests)."""
    get_session_maker.cache_clear()
    get_engine.cache_clear()
    get_database_url.cache_clear()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Leaving the context without a commit rolls the transaction back.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    engine = engine or get_engine()
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.drop_all)

    logger.info("Database tables dropped successfully")


# -----------------------------------------------------------------------------
# Identity Services
# -----------------------------------------------------------------------------


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_session_manager(session: DBSession, settings: SettingsDep) -> SessionManager:
    """Get the session manager bound to the request's database session."""
    return SessionManager(
        SessionRepositorySQLAlchemy(session),
        ttl_seconds=settings.session_ttl_seconds,
        timeout_seconds=settings.store_timeout_seconds,
    )


SessionMgr = Annotated[SessionManager, Depends(get_session_manager)]


async def get_authentication_service(
    session: DBSession,
    session_manager: SessionMgr,
    settings: SettingsDep,
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates user registration and login.
    """
    return AuthenticationService(
        credential_store=CredentialStoreSQLAlchemy(session),
        password_service=password_service,
        session_manager=session_manager,
        store_timeout_seconds=settings.store_timeout_seconds,
        hashing_timeout_seconds=settings.hashing_timeout_seconds,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
