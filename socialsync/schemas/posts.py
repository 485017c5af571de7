"""Pydantic schemas for post resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Payload used by API clients when constructing a post."""

    content: str = Field(..., min_length=1, max_length=2000)
    image_url: str | None = Field(default=None, max_length=1024)


class PostResponse(BaseModel):
    """Serialized post with author card and viewer-relative engagement."""

    id: UUID
    user_id: UUID
    content: str
    image_url: str | None = None
    created_at: datetime
    username: str | None = None
    author_name: str | None = None
    avatar_url: str | None = None
    like_count: int = 0
    comment_count: int = 0
    viewer_has_liked: bool = False


class PostFeedResponse(BaseModel):
    """Envelope used when returning a collection of posts."""

    items: list[PostResponse]


class LikeToggleResponse(BaseModel):
    success: bool = True
    post_id: UUID
    liked: bool
    like_count: int


class ActionResultResponse(BaseModel):
    success: bool


class PostCommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=500)


class PostCommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    user_id: UUID
    username: str | None = None
    author_name: str | None = None
    avatar_url: str | None = None
    content: str
    created_at: datetime


class PostCommentListResponse(BaseModel):
    items: list[PostCommentResponse]


__all__ = [
    "PostCreate",
    "PostResponse",
    "PostFeedResponse",
    "LikeToggleResponse",
    "ActionResultResponse",
    "PostCommentCreate",
    "PostCommentResponse",
    "PostCommentListResponse",
]
