"""Request and response bodies for registration and login."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    # Usernames end up in profile URLs.
    username: str = Field(..., min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_.]+$")
    password: str = Field(..., min_length=6, max_length=128)
    email: EmailStr | None = None
    display_name: str | None = Field(default=None, max_length=150)
    bio: str | None = Field(default=None, max_length=500)

    @field_validator("display_name", "bio")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    access_token: str
    user_id: UUID
    token_type: str = "bearer"


__all__ = ["RegisterRequest", "LoginRequest", "AuthResponse"]
