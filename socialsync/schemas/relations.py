"""Schemas for relation lists (followers, following, likers) and user search."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class RelationUserSummary(BaseModel):
    """Compact user card used by every relation list."""

    id: UUID
    username: str
    name: str | None = None
    avatar_url: str | None = None


class RelationListResponse(BaseModel):
    owner_id: UUID
    kind: str
    items: list[RelationUserSummary]


class UserSearchResponse(BaseModel):
    query: str
    results: list[RelationUserSummary]


__all__ = ["RelationUserSummary", "RelationListResponse", "UserSearchResponse"]
