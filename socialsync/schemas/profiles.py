"""Schemas for profile endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProfileResponse(BaseModel):
    id: UUID
    username: str
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    website: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    followers_count: int = 0
    following_count: int = 0
    posts_count: int = 0
    is_following: bool = False

    @field_validator("website", mode="before")
    def clean_website(cls, v):
        if v in (None, "", "None"):
            return None
        return v


class ProfileUpdateRequest(BaseModel):
    display_name: str | None = Field(default=None, max_length=150)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=255)
    website: str | None = Field(default=None, max_length=255)
    avatar_url: str | None = Field(default=None, max_length=1024)


__all__ = ["ProfileResponse", "ProfileUpdateRequest"]
