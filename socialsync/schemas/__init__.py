"""Convenience exports for schema layer."""
from .auth import AuthResponse, LoginRequest, RegisterRequest
from .follow import FollowActionResponse, FollowStatsResponse, FollowToggleResponse
from .posts import (
    ActionResultResponse,
    LikeToggleResponse,
    PostCommentCreate,
    PostCommentListResponse,
    PostCommentResponse,
    PostCreate,
    PostFeedResponse,
    PostResponse,
)
from .profiles import ProfileResponse, ProfileUpdateRequest
from .relations import RelationListResponse, RelationUserSummary, UserSearchResponse

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "FollowActionResponse",
    "FollowStatsResponse",
    "FollowToggleResponse",
    "ActionResultResponse",
    "LikeToggleResponse",
    "PostCommentCreate",
    "PostCommentListResponse",
    "PostCommentResponse",
    "PostCreate",
    "PostFeedResponse",
    "PostResponse",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "RelationListResponse",
    "RelationUserSummary",
    "UserSearchResponse",
]
