"""Business logic for follower relationships."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, cast
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Follow, User

RelationDirection = Literal["followers", "following"]


@dataclass(slots=True)
class FollowStats:
    user_id: UUID
    followers_count: int
    following_count: int
    is_following: bool


def user_summary(user: User) -> dict[str, Any]:
    """Compact card shared by relation lists and search results."""

    return {
        "id": user.id,
        "username": user.username,
        "name": user.display_name,
        "avatar_url": user.avatar_url,
    }


def _get_user_or_404(db: Session, user_id: UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _existing_edge(db: Session, follower_id: UUID, target_id: UUID) -> Follow | None:
    return db.scalar(
        select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == target_id)
    )


def follow_user(db: Session, *, follower: User, target_id: UUID) -> bool:
    follower_id = cast(UUID, follower.id)
    if follower_id == target_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")

    _get_user_or_404(db, target_id)

    if _existing_edge(db, follower_id, target_id) is not None:
        return False

    db.add(Follow(follower_id=follower_id, following_id=target_id))
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to follow user") from exc
    return True


def unfollow_user(db: Session, *, follower: User, target_id: UUID) -> bool:
    follower_id = cast(UUID, follower.id)
    if follower_id == target_id:
        return False

    record = _existing_edge(db, follower_id, target_id)
    if record is None:
        return False
    try:
        db.delete(record)
        db.commit()
        return True
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to unfollow user") from exc


def toggle_follow(db: Session, *, follower: User, target_id: UUID) -> Literal["followed", "unfollowed"]:
    """Flip the follow edge; the current database state decides the direction."""

    follower_id = cast(UUID, follower.id)
    if follower_id == target_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")

    if _existing_edge(db, follower_id, target_id) is not None:
        unfollow_user(db, follower=follower, target_id=target_id)
        return "unfollowed"

    follow_user(db, follower=follower, target_id=target_id)
    return "followed"


def get_follow_stats(db: Session, *, user_id: UUID, viewer_id: UUID | None = None) -> FollowStats:
    _get_user_or_404(db, user_id)

    followers_count = db.scalar(
        select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
    ) or 0
    following_count = db.scalar(
        select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
    ) or 0

    is_following = False
    if viewer_id is not None:
        is_following = _existing_edge(db, viewer_id, user_id) is not None

    return FollowStats(
        user_id=user_id,
        followers_count=int(followers_count),
        following_count=int(following_count),
        is_following=is_following,
    )


def list_follow_relations(db: Session, *, user_id: UUID, direction: RelationDirection) -> list[dict[str, Any]]:
    """Return the users on the other end of ``user_id``'s follow edges, oldest edge first."""

    _get_user_or_404(db, user_id)

    if direction == "followers":
        stmt = (
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == user_id)
        )
    else:
        stmt = (
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == user_id)
        )
    stmt = stmt.order_by(Follow.created_at.asc())
    return [user_summary(user) for user in db.scalars(stmt)]


__all__ = [
    "FollowStats",
    "RelationDirection",
    "follow_user",
    "unfollow_user",
    "toggle_follow",
    "get_follow_stats",
    "list_follow_relations",
    "user_summary",
]
