# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy repository implementations for identity management."""

from edugate_identity.infrastructure.persistence.sqlalchemy.repositories.credential_store import (
    CredentialStoreSQLAlchemy,
)
from edugate_identity.infrastructure.persistence.sqlalchemy.repositories.session_repository import (
    SessionRepositorySQLAlchemy,
)

__all__ = [
    "CredentialStoreSQLAlchemy",
    "SessionRepositorySQLAlchemy",
]
