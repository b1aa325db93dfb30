"""SQLAlchemy model for the school registry."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from edugate_identity.domain.shared.time import utc_now
from edugate_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase


class SchoolModel(IdentityBase):
    """A school users can register against."""

    __tablename__ = "schools"

    school_id: Mapped[str] = mapped_column(String(10), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<SchoolModel(school_id={self.school_id})>"
