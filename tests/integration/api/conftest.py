"""Pytest fixtures for API integration tests."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from edugate.presentation.api.app import API_PREFIX, create_app
from edugate.presentation.api.config import get_api_settings
from edugate.presentation.api.dependencies import get_db_session
from edugate_config.settings import Settings
from edugate_identity.infrastructure.persistence.sqlalchemy import (
    IdentityBase,
    SchoolModel,
)

TEST_SCHOOL_ID = "1234567890"


@pytest.fixture
def api_prefix() -> str:
    return API_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        db_url="sqlite+aiosqlite:///:memory:",
        create_schema_on_startup=False,
        api_host="127.0.0.1",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        api_cookie_secure=False,  # Allow HTTP in tests
        bcrypt_rounds=4,  # Low rounds for fast tests
    )


@pytest.fixture
async def test_db_engine():
    """Create an in-memory SQLite database with one registered school."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession)
    async with session_maker() as session:
        session.add(SchoolModel(school_id=TEST_SCHOOL_ID))
        await session.commit()

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_client(api_settings, test_db_engine):
    """Create an HTTP client bound to the app and the in-memory database."""
    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Override the database session dependency
    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def registration_payload() -> dict:
    """Registration body as sent by the front end."""
    return {
        "schoolId": TEST_SCHOOL_ID,
        "name": "Anna",
        "lastName": "Kowalska",
        "login": "annak",
        "password": "Passw0rd!",
        "email": "a@b.com",
        "role": "student",
        "status": "active",
    }


@pytest.fixture
async def registered_user(test_client, api_prefix, registration_payload) -> dict:
    """Register the default user and return the payload used."""
    response = await test_client.post(f"{api_prefix}/register", json=registration_payload)
    assert response.status_code == 200
    return registration_payload
