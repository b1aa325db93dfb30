"""Central error handling for the SQLAlchemy repositories.

Driver and ORM failures are logged with their traceback and re-raised as
the identity package's infrastructure errors, so callers never have to
know about SQLAlchemy.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from edugate_identity.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_repository_errors(
    operation_name: str,
    error_type: type[InfrastructureError],
) -> Callable[[F], F]:
    """Decorator for consistent error handling in async repositories.

    Parameters
    ----------
    operation_name
        Name used in log lines and error messages
    error_type
        Infrastructure error raised in place of the SQLAlchemy error
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as exc:
                logger.exception("Database error (%s): %s", operation_name, exc)
                msg = f"Database error during {operation_name}"
                raise error_type(msg) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
