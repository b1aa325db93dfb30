"""SQLAlchemy model for User aggregate."""

from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from edugate_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)

# Constraint names are matched when an insert races past the pre-check
LOGIN_CONSTRAINT = "uq_users_login"
EMAIL_CONSTRAINT = "uq_users_email"


class UserModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("login", name=LOGIN_CONSTRAINT),
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    login: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)
    school_id: Mapped[str] = mapped_column(
        String(10),
        ForeignKey("schools.school_id"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    photo_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    language: Mapped[str | None] = mapped_column(String(10), nullable=True)
    theme: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, login={self.login}, email={self.email})>"
