"""Password hashing service using bcrypt.

Provides salted one-way hashing and constant-time verification.
Strength rules live in ``edugate_identity.services.validation``.
"""

from functools import lru_cache

import bcrypt

from edugate_identity.exceptions import PasswordHashingError


@lru_cache(maxsize=8)
def _reference_hash(rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(b"edugate-reference-password", salt).decode("utf-8")


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    Both operations are CPU bound; async callers should run them in a
    worker thread.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hash = service.hash("Passw0rd!")
    >>> service.verify("Passw0rd!", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
            Higher values are more secure but slower.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string

        Raises
        ------
        PasswordHashingError
            If bcrypt rejects the input or the work factor
        """
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        except (ValueError, TypeError) as e:
            msg = f"Could not hash password: {e}"
            raise PasswordHashingError(msg) from e
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The bcrypt hash to verify against

        Returns
        -------
        True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def reference_hash(self) -> str:
        """Return a valid hash made with the configured work factor.

        Verifying against it costs the same as a real check, so a login
        for an unknown user takes as long as one with a wrong password.
        """
        return _reference_hash(self._rounds)

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was made with a different work factor.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                current_rounds = int(parts[2])
                return current_rounds != self._rounds
        except (ValueError, IndexError):
            pass
        return True
