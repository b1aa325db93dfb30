"""Application services for the identity domain."""

from edugate_identity.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = [
    "AuthenticationService",
]
