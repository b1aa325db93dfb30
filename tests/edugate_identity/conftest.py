"""
Pytest configuration for edugate_identity tests.

Provides users and registration payloads shared by unit and integration
tests.
"""

import pytest

from edugate_identity import User

TEST_SCHOOL_ID = "1234567890"
TEST_PASSWORD = "Passw0rd!"


@pytest.fixture
def registration_fields() -> dict:
    """Valid registration input (keyword arguments of register)."""
    return {
        "school_id": TEST_SCHOOL_ID,
        "first_name": "Anna",
        "last_name": "Kowalska",
        "login": "annak",
        "password": TEST_PASSWORD,
        "email": "a@b.com",
        "role": "student",
        "status": "active",
    }


@pytest.fixture
def test_user() -> User:
    """Create a standard test user with a placeholder hash."""
    return User.create(
        first_name="Anna",
        last_name="Kowalska",
        login="annak",
        email="a@b.com",
        password_hash="$2b$04$placeholderplaceholderplaceholderplaceholderplacehol",
        school_id=TEST_SCHOOL_ID,
        role="student",
        status="active",
    )
