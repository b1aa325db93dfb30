"""User domain exceptions.

Uniqueness violations for the user aggregate. They are raised both by the
service pre-check and by the persistence layer when the database
constraint fires.
"""

from edugate_identity.exceptions import AuthError, ErrorCode


class UserAlreadyExistsError(AuthError):
    """A user with the same login or email is already registered."""


class LoginAlreadyExistsError(UserAlreadyExistsError):
    """Login already registered."""

    def __init__(self, login: str) -> None:
        self.login = login
        super().__init__(f"Login already registered: {login}", ErrorCode.LOGIN_EXISTS)


class EmailAlreadyExistsError(UserAlreadyExistsError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}", ErrorCode.EMAIL_EXISTS)
