"""Identity and authentication exceptions.

These exceptions are raised by the edugate_identity package and are
translated into HTTP responses by the presentation layer. Every exception
carries the stable wire code that ends up in the response body.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    BAD_SCHOOL = "bad_school"
    BAD_DATA = "bad_data"
    LOGIN_EXISTS = "login_exists"
    EMAIL_EXISTS = "email_exists"
    SERVER_ERROR = "server_error"


class ResultMessage(str, Enum):
    """Success messages returned by the API."""

    REGISTER_COMPLETE = "register_complete"
    LOGOUT_SUCCESS = "logout_success"


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(
        self,
        message: str = "Authentication error",
        code: ErrorCode = ErrorCode.SERVER_ERROR,
    ):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, code={self.code.value!r})"
        )


class InvalidFieldError(AuthError):
    """Raised when an input field breaks a syntax or length rule."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.BAD_DATA,
        message: str = "Invalid input data",
    ):
        super().__init__(message, code)


class UnknownSchoolError(InvalidFieldError):
    """Raised when the referenced school is not in the registry."""

    def __init__(self, school_id: str):
        self.school_id = school_id
        super().__init__(ErrorCode.BAD_SCHOOL, f"Unknown school: {school_id}")


class InvalidCredentialsError(AuthError):
    """Raised when login or password is incorrect during login.

    Used for both an unknown login and a wrong password so the two cases
    cannot be told apart by the client.
    """

    def __init__(self, message: str = "Invalid login or password"):
        super().__init__(message, ErrorCode.BAD_DATA)


class InfrastructureError(AuthError):
    """Raised when a backing service (database, hashing) fails."""

    def __init__(self, message: str = "Infrastructure failure"):
        super().__init__(message, ErrorCode.SERVER_ERROR)


class CredentialStoreError(InfrastructureError):
    """Raised when the user/school store cannot complete an operation."""

    def __init__(self, message: str = "Credential store failure"):
        super().__init__(message)


class SessionStoreError(InfrastructureError):
    """Raised when the session backend cannot complete an operation."""

    def __init__(self, message: str = "Session store failure"):
        super().__init__(message)


class PasswordHashingError(InfrastructureError):
    """Raised when a password cannot be hashed."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)
