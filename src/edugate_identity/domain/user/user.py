"""User aggregate: a registered person attached to a school."""

from datetime import datetime
from uuid import UUID, uuid4

from edugate_identity.domain.shared.time import utc_now


class User:
    """
    User aggregate root.

    Holds the identity and display fields of a registered user together
    with the bcrypt password hash. The plaintext password never reaches
    this object.
    """

    def __init__(  # noqa: PLR0913
        self,
        first_name: str,
        last_name: str,
        login: str,
        email: str,
        password_hash: str,
        school_id: str,
        role: str,
        status: str,
        photo_url: str | None = None,
        language: str | None = None,
        theme: str | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._first_name = first_name
        self._last_name = last_name
        self._login = login
        self._email = email
        self._password_hash = password_hash
        self._school_id = school_id
        self._role = role
        self._status = status
        self._photo_url = photo_url
        self._language = language
        self._theme = theme
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def login(self) -> str:
        return self._login

    @property
    def email(self) -> str:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def school_id(self) -> str:
        return self._school_id

    @property
    def role(self) -> str:
        return self._role

    @property
    def status(self) -> str:
        return self._status

    @property
    def photo_url(self) -> str | None:
        return self._photo_url

    @property
    def language(self) -> str | None:
        return self._language

    @property
    def theme(self) -> str | None:
        return self._theme

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        first_name: str,
        last_name: str,
        login: str,
        email: str,
        password_hash: str,
        school_id: str,
        role: str,
        status: str,
    ) -> "User":
        return cls(
            first_name=first_name,
            last_name=last_name,
            login=login,
            email=email,
            password_hash=password_hash,
            school_id=school_id,
            role=role,
            status=status,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        first_name: str,
        last_name: str,
        login: str,
        email: str,
        password_hash: str,
        school_id: str,
        role: str,
        status: str,
        photo_url: str | None,
        language: str | None,
        theme: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            id=id,
            first_name=first_name,
            last_name=last_name,
            login=login,
            email=email,
            password_hash=password_hash,
            school_id=school_id,
            role=role,
            status=status,
            photo_url=photo_url,
            language=language,
            theme=theme,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, login={self._login}, email={self._email})"
