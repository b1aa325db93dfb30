"""Abstract repository interfaces for identity management."""

from edugate_identity.repositories.credential_store import CredentialStore
from edugate_identity.repositories.session_repository import (
    SessionData,
    SessionRepository,
)

__all__ = [
    "CredentialStore",
    "SessionData",
    "SessionRepository",
]
