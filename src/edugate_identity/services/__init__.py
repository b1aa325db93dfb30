"""Identity services - validation, password hashing and sessions."""

from edugate_identity.services.password_service import PasswordHashingService
from edugate_identity.services.session_manager import SessionManager
from edugate_identity.services.validation import validate_login, validate_registration

__all__ = [
    "PasswordHashingService",
    "SessionManager",
    "validate_login",
    "validate_registration",
]
