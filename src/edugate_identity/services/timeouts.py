"""Timeout guard for slow calls on the request path."""

import asyncio
from typing import Awaitable, TypeVar

from edugate_identity.exceptions import InfrastructureError

T = TypeVar("T")


async def run_with_timeout(
    awaitable: Awaitable[T],
    timeout: float | None,
    error: type[InfrastructureError],
    operation: str,
) -> T:
    """Await ``awaitable`` for at most ``timeout`` seconds.

    Raises
    ------
    InfrastructureError
        An instance of ``error`` when the deadline passes. The pending
        work is cancelled.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError as e:
        msg = f"{operation} timed out after {timeout}s"
        raise error(msg) from e
