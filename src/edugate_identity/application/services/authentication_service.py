"""Authentication service for user registration and login."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Awaitable, TypeVar
from uuid import UUID

from edugate_identity.domain.user import (
    EmailAlreadyExistsError,
    LoginAlreadyExistsError,
    User,
)
from edugate_identity.exceptions import (
    CredentialStoreError,
    ErrorCode,
    InfrastructureError,
    InvalidCredentialsError,
    InvalidFieldError,
    PasswordHashingError,
    UnknownSchoolError,
)
from edugate_identity.services.timeouts import run_with_timeout
from edugate_identity.services.validation import validate_login, validate_registration

if TYPE_CHECKING:
    from edugate_identity.repositories import CredentialStore
    from edugate_identity.schemas import SessionHandle
    from edugate_identity.services import PasswordHashingService, SessionManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates validation, the credential store, password hashing and
    the session manager to provide:
    - User registration against the school registry
    - Login with login/password, opening a server-side session

    The service keeps no state of its own. Store calls and bcrypt work
    are awaited with an upper bound so a stalled backend fails the single
    request instead of hanging it.
    """

    def __init__(  # noqa: PLR0913
        self,
        credential_store: CredentialStore,
        password_service: PasswordHashingService,
        session_manager: SessionManager,
        store_timeout_seconds: float | None = None,
        hashing_timeout_seconds: float | None = None,
    ):
        self._store = credential_store
        self._password_service = password_service
        self._session_manager = session_manager
        self._store_timeout = store_timeout_seconds
        self._hashing_timeout = hashing_timeout_seconds

    async def _store_call(self, awaitable: Awaitable[T], operation: str) -> T:
        return await run_with_timeout(
            awaitable,
            self._store_timeout,
            CredentialStoreError,
            operation,
        )

    async def _hash(self, password: str) -> str:
        return await run_with_timeout(
            asyncio.to_thread(self._password_service.hash, password),
            self._hashing_timeout,
            PasswordHashingError,
            "password hashing",
        )

    async def _verify(self, password: str, password_hash: str) -> bool:
        return await run_with_timeout(
            asyncio.to_thread(self._password_service.verify, password, password_hash),
            self._hashing_timeout,
            PasswordHashingError,
            "password verification",
        )

    async def register(  # noqa: PLR0913
        self,
        school_id: str,
        first_name: str,
        last_name: str,
        login: str,
        password: str,
        email: str,
        role: str,
        status: str,
    ) -> UUID:
        reason = validate_registration(
            school_id=school_id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            login=login,
            password=password,
            role=role,
            status=status,
        )
        if reason is not None:
            logger.info("Registration rejected (%s) for login: %s", reason.value, login)
            raise InvalidFieldError(reason)

        existing = await self._store_call(
            self._store.find_user_by_login_or_email(login, email),
            "user lookup",
        )
        if existing is not None:
            if existing.login == login:
                raise LoginAlreadyExistsError(login)
            raise EmailAlreadyExistsError(email)

        if not await self._store_call(self._store.school_exists(school_id), "school lookup"):
            raise UnknownSchoolError(school_id)

        password_hash = await self._hash(password)
        user = User.create(
            first_name=first_name,
            last_name=last_name,
            login=login,
            email=email,
            password_hash=password_hash,
            school_id=school_id,
            role=role,
            status=status,
        )
        user_id = await self._store_call(self._store.insert_user(user), "user insert")

        logger.info("User registered: %s (school: %s)", login, school_id)
        return user_id

    async def login(
        self,
        login: str,
        password: str,
        previous_session_id: str | None = None,
    ) -> SessionHandle:
        if validate_login(login, password) is not None:
            raise InvalidFieldError(ErrorCode.BAD_DATA)

        user = await self._store_call(self._store.find_user_by_login(login), "user lookup")
        if user is None:
            # Same bcrypt cost as a real check
            await self._verify(password, self._password_service.reference_hash())
            logger.info("Login failed for login: %s", login)
            raise InvalidCredentialsError

        if not await self._verify(password, user.password_hash):
            logger.info("Login failed for login: %s", login)
            raise InvalidCredentialsError

        await self._upgrade_hash_if_needed(user, password)

        if previous_session_id:
            await self._session_manager.destroy(previous_session_id)

        handle = await self._session_manager.create(user)

        logger.info("User logged in: %s", login)
        return handle

    async def _upgrade_hash_if_needed(self, user: User, password: str) -> None:
        if not self._password_service.needs_rehash(user.password_hash):
            return

        try:
            new_hash = await self._hash(password)
            await self._store_call(
                self._store.update_password_hash(user.id, new_hash),
                "password rehash",
            )
        except InfrastructureError as e:
            logger.warning("Could not upgrade password hash for user %s: %s", user.id, e)
            return

        logger.info("Upgraded password hash for user: %s", user.id)
