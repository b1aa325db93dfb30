"""Abstract repository interface for users and the school registry."""

from abc import ABC, abstractmethod
from uuid import UUID

from edugate_identity.domain.user import User


class CredentialStore(ABC):
    """Persistent lookup and insert of user and school records.

    Lookups are case-sensitive exact matches. Login and email uniqueness
    is enforced by the backing store itself; callers may pre-check, but
    ``insert_user`` is the source of truth.
    """

    @abstractmethod
    async def find_user_by_login_or_email(self, login: str, email: str) -> User | None:
        """Find a user whose login or email matches.

        When one user matches the login and another matches the email,
        the login match is returned.
        """

    @abstractmethod
    async def find_user_by_login(self, login: str) -> User | None:
        """Find a user by login."""

    @abstractmethod
    async def school_exists(self, school_id: str) -> bool:
        """Check whether a school is present in the registry."""

    @abstractmethod
    async def insert_user(self, user: User) -> UUID:
        """Insert a new user atomically.

        Returns
        -------
        The new user's identifier

        Raises
        ------
        LoginAlreadyExistsError
            If the login is taken
        EmailAlreadyExistsError
            If the email is taken
        """

    @abstractmethod
    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash of a user."""

    @abstractmethod
    async def add_school(self, school_id: str) -> bool:
        """Add a school to the registry.

        Returns
        -------
        True if the school was added, False if it was already present
        """

    @abstractmethod
    async def list_schools(self) -> list[str]:
        """List all registered school identifiers in ascending order."""
