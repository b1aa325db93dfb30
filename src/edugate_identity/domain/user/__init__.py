"""User domain manages registered users of the school registry.

This domain handles:
- User aggregate (identity, school membership, display preferences)
- Login/email uniqueness violations
"""

from edugate_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    LoginAlreadyExistsError,
    UserAlreadyExistsError,
)
from edugate_identity.domain.user.user import User

__all__ = [
    "EmailAlreadyExistsError",
    "LoginAlreadyExistsError",
    "User",
    "UserAlreadyExistsError",
]
