"""Centralized exception handlers for the FastAPI application.

Identity exceptions are mapped to HTTP responses with the compact body
the school registry front end expects.

Error Response Format:
    {
        "message": "machine_readable_code"
    }

Usage:
    from edugate.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from edugate_identity import (
    AuthError,
    ErrorCode,
    InfrastructureError,
    InvalidCredentialsError,
    InvalidFieldError,
    UserAlreadyExistsError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Type to HTTP Status Mapping
# =============================================================================

# Checked in order; the first matching base class wins
EXCEPTION_TO_STATUS: tuple[tuple[type[AuthError], int], ...] = (
    (InvalidFieldError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (UserAlreadyExistsError, status.HTTP_409_CONFLICT),
    (InfrastructureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def _get_status_for_exception(exc: AuthError) -> int:
    """Determine HTTP status code for an identity exception."""
    for exc_type, status_code in EXCEPTION_TO_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _create_error_response(status_code: int, code: ErrorCode) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={"message": code.value},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle identity exceptions.

        Infrastructure failures are logged with their traceback, client
        errors with a single line. The body only ever carries the code.
        """
        status_code = _get_status_for_exception(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Infrastructure failure on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc,
            )
            return _create_error_response(status_code, ErrorCode.SERVER_ERROR)

        logger.warning(
            "Request rejected on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
        )
        return _create_error_response(status_code, exc.code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Map malformed bodies (missing fields, wrong types) to bad_data."""
        logger.info(
            "Malformed request on %s %s: %d error(s)",
            request.method,
            request.url.path,
            len(exc.errors()),
        )
        return _create_error_response(
            status.HTTP_400_BAD_REQUEST,
            ErrorCode.BAD_DATA,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        This is the catch-all handler for any exceptions not handled by
        the handlers above. Internals never reach the client.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.SERVER_ERROR,
        )
