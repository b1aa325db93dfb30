"""SQLAlchemy implementation for edugate_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel, SchoolModel, SessionModel: table mappings
- CredentialStoreSQLAlchemy: users and school registry
- SessionRepositorySQLAlchemy: server-side sessions
"""

from edugate_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from edugate_identity.infrastructure.persistence.sqlalchemy.models import (
    SchoolModel,
    SessionModel,
    UserModel,
)
from edugate_identity.infrastructure.persistence.sqlalchemy.repositories import (
    CredentialStoreSQLAlchemy,
    SessionRepositorySQLAlchemy,
)

__all__ = [
    "CredentialStoreSQLAlchemy",
    "IdentityBase",
    "SchoolModel",
    "SessionModel",
    "SessionRepositorySQLAlchemy",
    "UserModel",
]
