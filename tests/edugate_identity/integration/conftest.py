"""
Pytest configuration for edugate_identity integration tests.

Repositories run against an in-memory SQLite database (aiosqlite). The
StaticPool keeps a single connection so every session sees the same
database.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from edugate_identity.infrastructure.persistence.sqlalchemy import (
    IdentityBase,
    SchoolModel,
)

TEST_SCHOOL_ID = "1234567890"


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite database with all identity tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    """Session with one registered school."""
    async with session_maker() as session:
        session.add(SchoolModel(school_id=TEST_SCHOOL_ID))
        await session.commit()
        yield session
