"""Abstract repository interface for server-side sessions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class SessionData:
    """Immutable stored session."""

    token_hash: str
    user_id: str
    logged_in: bool
    snapshot: dict[str, Any]
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Check if the session has expired."""
        return now >= self.expires_at


class SessionRepository(ABC):
    """Abstract repository for sessions keyed by a hashed session id."""

    @abstractmethod
    async def create(
        self,
        token_hash: str,
        user_id: str,
        snapshot: dict[str, Any],
        expires_at: datetime,
    ) -> SessionData:
        """Store a new logged-in session.

        Parameters
        ----------
        token_hash
            SHA-256 hash of the raw session id
        user_id
            The owning user's identifier
        snapshot
            Profile fields captured at login
        expires_at
            When the session stops being valid
        """

    @abstractmethod
    async def find_by_hash(self, token_hash: str) -> SessionData | None:
        """Find a session by the hash of its id, expired or not."""

    @abstractmethod
    async def delete_by_hash(self, token_hash: str) -> bool:
        """Delete a session.

        Returns
        -------
        True if a session was deleted
        """

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Remove expired sessions.

        Returns
        -------
        Number of sessions deleted
        """
