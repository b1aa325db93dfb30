"""SQLAlchemy implementation of CredentialStore."""

import logging
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from edugate_identity.domain.shared.time import utc_now
from edugate_identity.domain.user import (
    EmailAlreadyExistsError,
    LoginAlreadyExistsError,
    User,
    UserAlreadyExistsError,
)
from edugate_identity.exceptions import CredentialStoreError
from edugate_identity.infrastructure.persistence.sqlalchemy.error_handling import (
    handle_repository_errors,
)
from edugate_identity.infrastructure.persistence.sqlalchemy.models import (
    EMAIL_CONSTRAINT,
    LOGIN_CONSTRAINT,
    SchoolModel,
    UserModel,
)
from edugate_identity.repositories import CredentialStore

logger = logging.getLogger(__name__)


def _conflict_from_integrity_error(
    error: IntegrityError,
    user: User,
) -> UserAlreadyExistsError | None:
    # Driver messages name the constraint (PostgreSQL, MySQL) or the
    # column (SQLite: "UNIQUE constraint failed: users.login")
    message = str(error.orig)
    if LOGIN_CONSTRAINT in message or "users.login" in message:
        return LoginAlreadyExistsError(user.login)
    if EMAIL_CONSTRAINT in message or "users.email" in message:
        return EmailAlreadyExistsError(user.email)
    return None


class CredentialStoreSQLAlchemy(CredentialStore):
    """SQLAlchemy implementation of the CredentialStore interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @handle_repository_errors("user lookup", CredentialStoreError)
    async def find_user_by_login_or_email(self, login: str, email: str) -> User | None:
        stmt = (
            select(UserModel)
            .where(or_(UserModel.login == login, UserModel.email == email))
            .limit(2)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        if not models:
            return None

        model = next((m for m in models if m.login == login), models[0])
        return self._map_to_domain(model)

    @handle_repository_errors("user lookup", CredentialStoreError)
    async def find_user_by_login(self, login: str) -> User | None:
        stmt = select(UserModel).where(UserModel.login == login)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    @handle_repository_errors("school lookup", CredentialStoreError)
    async def school_exists(self, school_id: str) -> bool:
        stmt = select(SchoolModel.school_id).where(SchoolModel.school_id == school_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    @handle_repository_errors("user insert", CredentialStoreError)
    async def insert_user(self, user: User) -> UUID:
        self._session.add(self._map_to_model(user))

        try:
            await self._session.flush()
        except IntegrityError as e:
            conflict = _conflict_from_integrity_error(e, user)
            if conflict is None:
                raise
            logger.info("Insert rejected by uniqueness constraint: %s", conflict.code.value)
            raise conflict from e

        logger.info("Created user: %s (login: %s)", user.id, user.login)
        return user.id

    @handle_repository_errors("password hash update", CredentialStoreError)
    async def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash, updated_at=utc_now())
        )
        # Savepoint: a failed update must not abort the caller's transaction
        async with self._session.begin_nested():
            await self._session.execute(stmt)

    @handle_repository_errors("school insert", CredentialStoreError)
    async def add_school(self, school_id: str) -> bool:
        if await self.school_exists(school_id):
            return False

        self._session.add(SchoolModel(school_id=school_id))
        await self._session.flush()
        logger.info("Added school: %s", school_id)
        return True

    @handle_repository_errors("school listing", CredentialStoreError)
    async def list_schools(self) -> list[str]:
        stmt = select(SchoolModel.school_id).order_by(SchoolModel.school_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            login=model.login,
            email=model.email,
            password_hash=model.password_hash,
            school_id=model.school_id,
            role=model.role,
            status=model.status,
            photo_url=model.photo_url,
            language=model.language,
            theme=model.theme,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            login=user.login,
            email=user.email,
            password_hash=user.password_hash,
            school_id=user.school_id,
            role=user.role,
            status=user.status,
            photo_url=user.photo_url,
            language=user.language,
            theme=user.theme,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
