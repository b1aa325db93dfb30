"""Authentication schemas for request/response models.

Request fields are plain strings: length and syntax rules are enforced by
the identity validator so that every violation maps to a stable code.
"""

from pydantic import BaseModel, ConfigDict, Field

from edugate_identity import SessionSnapshot


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    school_id: str = Field(..., alias="schoolId", description="10 digit school id")
    first_name: str = Field(..., alias="name")
    last_name: str = Field(..., alias="lastName")
    login: str
    password: str
    email: str
    role: str
    status: str

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "schoolId": "1234567890",
                "name": "Anna",
                "lastName": "Kowalska",
                "login": "annak",
                "password": "Passw0rd!",
                "email": "a@b.com",
                "role": "student",
                "status": "active",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    login: str
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "login": "annak",
                "password": "Passw0rd!",
            },
        },
    )


class ProfileResponse(BaseModel):
    """Profile stored in the session, returned by login and checkSession."""

    user_id: str = Field(..., alias="userId")
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    login: str
    email: str
    school_id: str = Field(..., alias="schoolId")
    role: str
    photo_url: str | None = Field(default=None, alias="photoURL")
    language: str | None = None
    theme: str | None = None
    status: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "ProfileResponse":
        return cls(**snapshot.to_dict())


class MessageResponse(BaseModel):
    """Plain outcome message, e.g. ``register_complete``."""

    message: str
