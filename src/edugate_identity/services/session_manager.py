"""Server-side session lifecycle.

A session moves from absent to active on login and back to absent on
logout or expiry. The raw session id is a random capability that only the
client holds; the backend stores its SHA-256 hash.
"""

import hashlib
import logging
import secrets
from datetime import timedelta

from edugate_identity.domain.shared.time import utc_now
from edugate_identity.domain.user import User
from edugate_identity.exceptions import SessionStoreError
from edugate_identity.repositories import SessionRepository
from edugate_identity.schemas import SessionHandle, SessionSnapshot
from edugate_identity.services.timeouts import run_with_timeout

logger = logging.getLogger(__name__)


class SessionManager:
    """Creates, reads and destroys sessions."""

    SESSION_ID_BYTES = 32

    def __init__(
        self,
        session_repository: SessionRepository,
        ttl_seconds: int = 24 * 3600,
        timeout_seconds: float | None = None,
    ):
        self._session_repo = session_repository
        self._ttl = timedelta(seconds=ttl_seconds)
        self._timeout = timeout_seconds

    @staticmethod
    def hash_session_id(session_id: str) -> str:
        return hashlib.sha256(session_id.encode()).hexdigest()

    async def create(self, user: User) -> SessionHandle:
        """Open a logged-in session for ``user``.

        Returns
        -------
        The handle carrying the raw session id and the stored snapshot
        """
        session_id = secrets.token_urlsafe(self.SESSION_ID_BYTES)
        snapshot = SessionSnapshot.from_user(user)
        expires_at = utc_now() + self._ttl

        await run_with_timeout(
            self._session_repo.create(
                token_hash=self.hash_session_id(session_id),
                user_id=snapshot.user_id,
                snapshot=snapshot.to_dict(),
                expires_at=expires_at,
            ),
            self._timeout,
            SessionStoreError,
            "session create",
        )

        logger.info("Session created for user: %s", user.id)
        return SessionHandle(
            session_id=session_id,
            snapshot=snapshot,
            expires_at=expires_at,
        )

    async def read(self, session_id: str | None) -> SessionSnapshot | None:
        """Return the snapshot of an active session.

        Missing, unknown, expired and logged-out sessions all yield
        ``None``. Expired sessions are deleted on the way.
        """
        if not session_id:
            return None

        token_hash = self.hash_session_id(session_id)
        data = await run_with_timeout(
            self._session_repo.find_by_hash(token_hash),
            self._timeout,
            SessionStoreError,
            "session read",
        )
        if data is None:
            return None

        if data.is_expired(utc_now()):
            logger.debug("Session expired for user: %s", data.user_id)
            await self._delete(token_hash)
            return None

        if not data.logged_in:
            return None

        try:
            return SessionSnapshot.from_dict(data.snapshot)
        except TypeError:
            # Snapshot written by an incompatible version; force a new login
            logger.warning("Dropping unreadable session for user: %s", data.user_id)
            await self._delete(token_hash)
            return None

    async def destroy(self, session_id: str | None) -> None:
        """Invalidate a session. Unknown sessions are a no-op.

        Raises
        ------
        SessionStoreError
            If the backend cannot delete the session
        """
        if not session_id:
            return

        if await self._delete(self.hash_session_id(session_id)):
            logger.info("Session destroyed")

    async def cleanup_expired(self) -> int:
        """Remove all expired sessions and return how many were removed."""
        removed = await run_with_timeout(
            self._session_repo.cleanup_expired(),
            self._timeout,
            SessionStoreError,
            "session cleanup",
        )
        if removed:
            logger.info("Removed %d expired sessions", removed)
        return removed

    async def _delete(self, token_hash: str) -> bool:
        return await run_with_timeout(
            self._session_repo.delete_by_hash(token_hash),
            self._timeout,
            SessionStoreError,
            "session delete",
        )
