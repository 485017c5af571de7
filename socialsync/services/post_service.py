"""Business logic for posts, likes and comments."""
from __future__ import annotations

import logging
from typing import Any, cast
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Post, PostComment, PostLike, User
from .follow_service import user_summary

logger = logging.getLogger(__name__)


def _get_post_or_404(db: Session, post_id: UUID) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _like_count(db: Session, post_id: UUID) -> int:
    return int(db.scalar(select(func.count(PostLike.id)).where(PostLike.post_id == post_id)) or 0)


def _viewer_like(db: Session, post_id: UUID, user_id: UUID) -> PostLike | None:
    return db.scalar(select(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id))


def create_post_record(db: Session, *, author: User, content: str, image_url: str | None = None) -> Post:
    """Create and persist a new post for ``author``."""

    text = (content or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Post cannot be empty")

    post = Post(user_id=author.id, content=text, image_url=(image_url or "").strip() or None)
    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create post") from exc
    db.refresh(post)
    return post


def list_feed_records(
    db: Session,
    *,
    viewer_id: UUID | None = None,
    author_id: UUID | None = None,
    liked_by_id: UUID | None = None,
) -> list[dict[str, Any]]:
    """Return posts newest first, optionally filtered by author or by a user's likes."""

    like_count_col = select(func.count(PostLike.id)).where(PostLike.post_id == Post.id).scalar_subquery()
    comment_count_col = select(func.count(PostComment.id)).where(PostComment.post_id == Post.id).scalar_subquery()

    statement = select(
        Post,
        User.username,
        User.display_name,
        User.avatar_url,
        like_count_col,
        comment_count_col,
    ).join(User, Post.user_id == User.id)

    if viewer_id is not None:
        viewer_like_col = (
            select(func.count(PostLike.id))
            .where(PostLike.post_id == Post.id, PostLike.user_id == viewer_id)
            .scalar_subquery()
        )
        statement = statement.add_columns(viewer_like_col)

    if author_id is not None:
        statement = statement.where(Post.user_id == author_id)
    if liked_by_id is not None:
        liked_post_ids = select(PostLike.post_id).where(PostLike.user_id == liked_by_id)
        statement = statement.where(Post.id.in_(liked_post_ids))

    statement = statement.order_by(Post.created_at.desc())

    records: list[dict[str, Any]] = []
    for row in db.execute(statement).all():
        post, username, display_name, avatar_url, like_count, comment_count = row[:6]
        viewer_like = row[6] if viewer_id is not None else 0
        records.append(
            {
                "id": post.id,
                "user_id": post.user_id,
                "content": post.content,
                "image_url": post.image_url,
                "created_at": post.created_at,
                "username": cast(str | None, username),
                "author_name": cast(str | None, display_name),
                "avatar_url": cast(str | None, avatar_url),
                "like_count": int(like_count or 0),
                "comment_count": int(comment_count or 0),
                "viewer_has_liked": bool(viewer_like),
            }
        )
    return records


def toggle_post_like(db: Session, *, post_id: UUID, user_id: UUID) -> dict[str, Any]:
    """Create or remove the viewer's like depending on whether it exists."""

    _get_post_or_404(db, post_id)

    existing = _viewer_like(db, post_id, user_id)
    if existing is None:
        db.add(PostLike(post_id=post_id, user_id=user_id))
    else:
        db.delete(existing)

    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update like") from exc

    return {
        "post_id": post_id,
        "liked": existing is None,
        "like_count": _like_count(db, post_id),
    }


def list_liking_users(db: Session, *, post_id: UUID) -> list[dict[str, Any]]:
    """Return the users who liked ``post_id``, earliest like first."""

    _get_post_or_404(db, post_id)
    stmt = (
        select(User)
        .join(PostLike, PostLike.user_id == User.id)
        .where(PostLike.post_id == post_id)
        .order_by(PostLike.created_at.asc())
    )
    return [user_summary(user) for user in db.scalars(stmt)]


def _comment_payload(comment: PostComment, author: User) -> dict[str, Any]:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user_id": author.id,
        "username": author.username,
        "author_name": author.display_name,
        "avatar_url": author.avatar_url,
        "content": comment.content,
        "created_at": comment.created_at,
    }


def list_post_comments(db: Session, *, post_id: UUID) -> list[dict[str, Any]]:
    _get_post_or_404(db, post_id)
    stmt = (
        select(PostComment, User)
        .join(User, PostComment.user_id == User.id)
        .where(PostComment.post_id == post_id)
        .order_by(PostComment.created_at.asc())
    )
    return [_comment_payload(comment, author) for comment, author in db.execute(stmt).all()]


def create_post_comment(db: Session, *, post_id: UUID, author: User, content: str) -> dict[str, Any]:
    post = _get_post_or_404(db, post_id)
    text = (content or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Comment cannot be empty")

    comment = PostComment(post_id=post.id, user_id=author.id, content=text)
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add comment") from exc

    db.refresh(comment)
    return _comment_payload(comment, author)


def delete_post_comment(db: Session, *, comment_id: UUID, requester_id: UUID) -> None:
    """Delete a comment when the requester wrote it."""

    comment = db.get(PostComment, comment_id)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    if comment.user_id != requester_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to delete this comment")

    try:
        db.delete(comment)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete comment") from exc


def delete_post_record(db: Session, *, post_id: UUID, requester_id: UUID) -> None:
    """Delete a post when the requester is its author."""

    post = _get_post_or_404(db, post_id)
    if post.user_id != requester_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to delete this post")

    try:
        db.delete(post)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete post") from exc
    logger.info("Post %s deleted by %s", post_id, requester_id)


__all__ = [
    "create_post_record",
    "list_feed_records",
    "toggle_post_like",
    "list_liking_users",
    "list_post_comments",
    "create_post_comment",
    "delete_post_comment",
    "delete_post_record",
]
