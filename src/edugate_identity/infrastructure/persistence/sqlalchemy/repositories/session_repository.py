"""SQLAlchemy implementation of SessionRepository."""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from edugate_identity.domain.shared.time import ensure_tz_aware, utc_now
from edugate_identity.exceptions import SessionStoreError
from edugate_identity.infrastructure.persistence.sqlalchemy.error_handling import (
    handle_repository_errors,
)
from edugate_identity.infrastructure.persistence.sqlalchemy.models import (
    SessionModel,
)
from edugate_identity.repositories import SessionData, SessionRepository


class SessionRepositorySQLAlchemy(SessionRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_data(self, model: SessionModel) -> SessionData:
        # SQLite hands back naive datetimes
        return SessionData(
            token_hash=model.token_hash,
            user_id=model.user_id,
            logged_in=model.logged_in,
            snapshot=dict(model.snapshot),
            created_at=ensure_tz_aware(model.created_at),
            expires_at=ensure_tz_aware(model.expires_at),
        )

    @handle_repository_errors("session create", SessionStoreError)
    async def create(
        self,
        token_hash: str,
        user_id: str,
        snapshot: dict[str, Any],
        expires_at: datetime,
    ) -> SessionData:
        model = SessionModel(
            token_hash=token_hash,
            user_id=user_id,
            logged_in=True,
            snapshot=snapshot,
            created_at=utc_now(),
            expires_at=expires_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_data(model)

    @handle_repository_errors("session read", SessionStoreError)
    async def find_by_hash(self, token_hash: str) -> SessionData | None:
        stmt = select(SessionModel).where(SessionModel.token_hash == token_hash)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_data(model)

    @handle_repository_errors("session delete", SessionStoreError)
    async def delete_by_hash(self, token_hash: str) -> bool:
        stmt = (
            delete(SessionModel)
            .where(SessionModel.token_hash == token_hash)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount > 0

    @handle_repository_errors("session cleanup", SessionStoreError)
    async def cleanup_expired(self) -> int:
        stmt = (
            delete(SessionModel)
            .where(SessionModel.expires_at <= utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount
