"""Follow management API routes."""
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import cast
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import (
    FollowActionResponse,
    FollowStatsResponse,
    FollowToggleResponse,
    RelationListResponse,
    RelationUserSummary,
)
from ..services import (
    follow_user,
    get_current_user,
    get_follow_stats,
    get_optional_user,
    list_follow_relations,
    toggle_follow,
    unfollow_user,
)

router = APIRouter(prefix="/follows", tags=["follows"])

logger = logging.getLogger(__name__)


@router.post("/{target_id}/toggle", response_model=FollowToggleResponse)
async def toggle_follow_endpoint(
    target_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> FollowToggleResponse:
    viewer_id = cast(UUID, current_user.id)
    outcome = toggle_follow(db, follower=current_user, target_id=target_id)
    logger.info("User %s %s %s", viewer_id, outcome, target_id)
    stats = get_follow_stats(db, user_id=target_id, viewer_id=viewer_id)
    return FollowToggleResponse(**asdict(stats), status=outcome, success=True)


@router.post("/{target_id}", response_model=FollowActionResponse, status_code=status.HTTP_201_CREATED)
async def follow_user_endpoint(
    target_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> FollowActionResponse:
    viewer_id = cast(UUID, current_user.id)
    changed = follow_user(db, follower=current_user, target_id=target_id)
    stats = get_follow_stats(db, user_id=target_id, viewer_id=viewer_id)
    payload = asdict(stats)
    payload["status"] = "followed" if changed else "noop"
    return FollowActionResponse(**payload)


@router.delete("/{target_id}", response_model=FollowActionResponse)
async def unfollow_user_endpoint(
    target_id: UUID,
    db: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
) -> FollowActionResponse:
    viewer_id = cast(UUID, current_user.id)
    changed = unfollow_user(db, follower=current_user, target_id=target_id)
    stats = get_follow_stats(db, user_id=target_id, viewer_id=viewer_id)
    payload = asdict(stats)
    payload["status"] = "unfollowed" if changed else "noop"
    return FollowActionResponse(**payload)


@router.get("/stats/{user_id}", response_model=FollowStatsResponse)
async def follow_stats_endpoint(
    user_id: UUID,
    db: Session = Depends(get_session),
    viewer: User | None = Depends(get_optional_user),
) -> FollowStatsResponse:
    viewer_id = cast(UUID, viewer.id) if viewer else None
    stats = get_follow_stats(db, user_id=user_id, viewer_id=viewer_id)
    return FollowStatsResponse(**asdict(stats))


@router.get("/{user_id}/followers", response_model=RelationListResponse)
async def followers_endpoint(
    user_id: UUID,
    db: Session = Depends(get_session),
) -> RelationListResponse:
    items = list_follow_relations(db, user_id=user_id, direction="followers")
    return RelationListResponse(
        owner_id=user_id,
        kind="followers",
        items=[RelationUserSummary(**item) for item in items],
    )


@router.get("/{user_id}/following", response_model=RelationListResponse)
async def following_endpoint(
    user_id: UUID,
    db: Session = Depends(get_session),
) -> RelationListResponse:
    items = list_follow_relations(db, user_id=user_id, direction="following")
    return RelationListResponse(
        owner_id=user_id,
        kind="following",
        items=[RelationUserSummary(**item) for item in items],
    )
