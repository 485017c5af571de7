"""Post, like and comment API routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import (
    ActionResultResponse,
    LikeToggleResponse,
    PostCommentCreate,
    PostCommentListResponse,
    PostCommentResponse,
    PostCreate,
    PostFeedResponse,
    PostResponse,
    RelationListResponse,
    RelationUserSummary,
)
from ..services import (
    create_post_comment,
    create_post_record,
    delete_post_comment,
    delete_post_record,
    get_current_user,
    get_optional_user,
    get_user_by_username,
    list_feed_records,
    list_liking_users,
    list_post_comments,
    toggle_post_like,
)

router = APIRouter(prefix="/posts", tags=["posts"])


def _viewer_id(user: User | None) -> UUID | None:
    return user.id if user else None


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    payload: PostCreate,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> PostResponse:
    post = create_post_record(db, author=current_user, content=payload.content, image_url=payload.image_url)
    return PostResponse(
        id=post.id,
        user_id=post.user_id,
        content=post.content,
        image_url=post.image_url,
        created_at=post.created_at,
        username=current_user.username,
        author_name=current_user.display_name,
        avatar_url=current_user.avatar_url,
    )


@router.get("/feed", response_model=PostFeedResponse)
async def feed_endpoint(
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> PostFeedResponse:
    items = list_feed_records(db, viewer_id=_viewer_id(current_user))
    return PostFeedResponse(items=[PostResponse(**item) for item in items])


@router.get("/by-user/{username}", response_model=PostFeedResponse)
async def posts_by_user_endpoint(
    username: str,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> PostFeedResponse:
    user = get_user_by_username(db, username)
    items = list_feed_records(db, viewer_id=_viewer_id(current_user), author_id=user.id)
    return PostFeedResponse(items=[PostResponse(**item) for item in items])


@router.get("/liked-by/{username}", response_model=PostFeedResponse)
async def posts_liked_by_user_endpoint(
    username: str,
    db: Session = Depends(get_session),
    current_user: User | None = Depends(get_optional_user),
) -> PostFeedResponse:
    user = get_user_by_username(db, username)
    items = list_feed_records(db, viewer_id=_viewer_id(current_user), liked_by_id=user.id)
    return PostFeedResponse(items=[PostResponse(**item) for item in items])


@router.post("/{post_id}/likes/toggle", response_model=LikeToggleResponse)
async def toggle_like_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> LikeToggleResponse:
    payload = toggle_post_like(db, post_id=post_id, user_id=current_user.id)
    return LikeToggleResponse(success=True, **payload)


@router.get("/{post_id}/likes", response_model=RelationListResponse)
async def liking_users_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
) -> RelationListResponse:
    items = list_liking_users(db, post_id=post_id)
    return RelationListResponse(
        owner_id=post_id,
        kind="likers",
        items=[RelationUserSummary(**item) for item in items],
    )


@router.get("/{post_id}/comments", response_model=PostCommentListResponse)
async def list_post_comments_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
) -> PostCommentListResponse:
    items = list_post_comments(db, post_id=post_id)
    return PostCommentListResponse(items=[PostCommentResponse(**item) for item in items])


@router.post("/{post_id}/comments", response_model=PostCommentResponse, status_code=status.HTTP_201_CREATED)
async def create_post_comment_endpoint(
    post_id: UUID,
    payload: PostCommentCreate,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> PostCommentResponse:
    comment = create_post_comment(db, post_id=post_id, author=current_user, content=payload.content)
    return PostCommentResponse(**comment)


@router.delete("/comments/{comment_id}", response_model=ActionResultResponse)
async def delete_post_comment_endpoint(
    comment_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> ActionResultResponse:
    delete_post_comment(db, comment_id=comment_id, requester_id=current_user.id)
    return ActionResultResponse(success=True)


@router.delete("/{post_id}", response_model=ActionResultResponse)
async def delete_post_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> ActionResultResponse:
    delete_post_record(db, post_id=post_id, requester_id=current_user.id)
    return ActionResultResponse(success=True)
