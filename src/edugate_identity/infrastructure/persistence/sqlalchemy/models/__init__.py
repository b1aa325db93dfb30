# ruff: noqa: E501 - Long import paths in __init__.py re-exports
"""SQLAlchemy models for identity management."""

from edugate_identity.infrastructure.persistence.sqlalchemy.models.school_model import (
    SchoolModel,
)
from edugate_identity.infrastructure.persistence.sqlalchemy.models.session_model import (
    SessionModel,
)
from edugate_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    EMAIL_CONSTRAINT,
    LOGIN_CONSTRAINT,
    UserModel,
)

__all__ = [
    "EMAIL_CONSTRAINT",
    "LOGIN_CONSTRAINT",
    "SchoolModel",
    "SessionModel",
    "UserModel",
]
