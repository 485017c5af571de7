"""Profile lookups, edits and user search."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..models import Post, User
from ..schemas import ProfileUpdateRequest
from .follow_service import get_follow_stats, user_summary


def get_user_by_username(db: Session, username: str) -> User:
    user = db.scalar(select(User).where(User.username == username))
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def get_profile(db: Session, username: str, *, viewer_id: UUID | None = None) -> dict[str, Any]:
    """Return the profile card for ``username`` with counters and the viewer's follow flag."""

    user = get_user_by_username(db, username)
    stats = get_follow_stats(db, user_id=user.id, viewer_id=viewer_id)
    posts_count = db.scalar(select(func.count(Post.id)).where(Post.user_id == user.id)) or 0
    return {
        "id": user.id,
        "username": user.username,
        "display_name": user.display_name,
        "bio": user.bio,
        "location": user.location,
        "website": user.website,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at,
        "followers_count": stats.followers_count,
        "following_count": stats.following_count,
        "posts_count": int(posts_count),
        "is_following": stats.is_following,
    }


def update_profile(db: Session, *, user_id: UUID, payload: ProfileUpdateRequest) -> User:
    """Apply profile updates for the supplied ``user_id``."""

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    # Only fields sent by the client; blank strings clear the value.
    update_data = payload.model_dump(exclude_unset=True)

    # An empty avatar never overwrites the stored one.
    if update_data.get("avatar_url") in (None, ""):
        update_data.pop("avatar_url", None)

    for field, value in update_data.items():
        if isinstance(value, str):
            value = value.strip() or None
        setattr(user, field, value)

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile",
        ) from exc

    db.refresh(user)
    return user


def search_users(db: Session, query: str, *, limit: int | None = None) -> list[dict[str, Any]]:
    """Case-insensitive substring match on username or display name."""

    text = (query or "").strip()
    if not text:
        return []
    # Wildcards typed by the user match literally.
    escaped = text.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    stmt = (
        select(User)
        .where(
            or_(
                func.lower(User.username).like(pattern, escape="\\"),
                func.lower(User.display_name).like(pattern, escape="\\"),
            )
        )
        .order_by(User.username.asc())
        .limit(limit or get_settings().search_result_limit)
    )
    return [user_summary(user) for user in db.scalars(stmt)]


__all__ = ["get_user_by_username", "get_profile", "update_profile", "search_users"]
