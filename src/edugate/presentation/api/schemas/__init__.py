"""Pydantic schemas for API request/response models."""

from edugate.presentation.api.schemas.auth import (
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
)

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "ProfileResponse",
    "RegisterRequest",
]
