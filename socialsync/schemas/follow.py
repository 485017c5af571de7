"""Schemas for follow counters and follow mutations."""
from __future__ import annotations

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

FollowStatus = Literal["followed", "unfollowed", "noop"]


class FollowStatsResponse(BaseModel):
    """Counters for ``user_id``; ``is_following`` is relative to the caller."""

    user_id: UUID
    followers_count: int
    following_count: int
    is_following: bool


class FollowActionResponse(FollowStatsResponse):
    status: FollowStatus


class FollowToggleResponse(FollowActionResponse):
    success: bool = True


__all__ = ["FollowStatus", "FollowStatsResponse", "FollowActionResponse", "FollowToggleResponse"]
