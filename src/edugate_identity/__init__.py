"""EduGate Identity - registration, login and sessions for the school registry.

This module handles all identity-related concerns:
- Field validation for registration and login
- Password hashing (bcrypt)
- Users and the school registry (credential store)
- Server-side sessions
"""

from edugate_identity.application.services import AuthenticationService
from edugate_identity.domain.user import (
    EmailAlreadyExistsError,
    LoginAlreadyExistsError,
    User,
    UserAlreadyExistsError,
)
from edugate_identity.exceptions import (
    AuthError,
    CredentialStoreError,
    ErrorCode,
    InfrastructureError,
    InvalidCredentialsError,
    InvalidFieldError,
    PasswordHashingError,
    ResultMessage,
    SessionStoreError,
    UnknownSchoolError,
)
from edugate_identity.repositories import (
    CredentialStore,
    SessionData,
    SessionRepository,
)
from edugate_identity.schemas import SessionHandle, SessionSnapshot
from edugate_identity.services import (
    PasswordHashingService,
    SessionManager,
    validate_login,
    validate_registration,
)

__all__ = [
    # Domain - User
    "EmailAlreadyExistsError",
    "LoginAlreadyExistsError",
    "User",
    "UserAlreadyExistsError",
    # Exceptions
    "AuthError",
    "CredentialStoreError",
    "ErrorCode",
    "InfrastructureError",
    "InvalidCredentialsError",
    "InvalidFieldError",
    "PasswordHashingError",
    "ResultMessage",
    "SessionStoreError",
    "UnknownSchoolError",
    # Repositories
    "CredentialStore",
    "SessionData",
    "SessionRepository",
    # Schemas
    "SessionHandle",
    "SessionSnapshot",
    # Services
    "PasswordHashingService",
    "SessionManager",
    "validate_login",
    "validate_registration",
    # Application Services
    "AuthenticationService",
]
