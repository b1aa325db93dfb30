"""Identity schemas and data structures.

These are simple data classes used for transferring identity
data between components.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from edugate_identity.domain.user import User


@dataclass(frozen=True)
class SessionSnapshot:
    """Profile fields copied into a session at login time.

    The snapshot is what ``/api/login`` and ``/api/checkSession`` return.
    It is denormalized on purpose: later profile edits do not change an
    already open session.

    Attributes
    ----------
    user_id
        The user's unique identifier (string form of the UUID)
    school_id
        Ten digit school registry identifier
    photo_url, language, theme
        Optional display preferences, ``None`` when unset
    """

    user_id: str
    first_name: str
    last_name: str
    login: str
    email: str
    school_id: str
    role: str
    status: str
    photo_url: str | None = None
    language: str | None = None
    theme: str | None = None

    @classmethod
    def from_user(cls, user: User) -> SessionSnapshot:
        return cls(
            user_id=str(user.id),
            first_name=user.first_name,
            last_name=user.last_name,
            login=user.login,
            email=user.email,
            school_id=user.school_id,
            role=user.role,
            status=user.status,
            photo_url=user.photo_url,
            language=user.language,
            theme=user.theme,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionSnapshot:
        """Rebuild a snapshot, ignoring keys this version does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SessionHandle:
    """A freshly created session as seen by the caller.

    Attributes
    ----------
    session_id
        The raw opaque id; hand it to the client and nowhere else
    snapshot
        Profile fields stored with the session
    expires_at
        Absolute expiry of the session
    """

    session_id: str
    snapshot: SessionSnapshot
    expires_at: datetime
