"""Profile API routes."""
from __future__ import annotations

from typing import cast
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_session
from ..models import User
from ..schemas import ProfileResponse, ProfileUpdateRequest
from ..services import get_current_user, get_optional_user, get_profile, update_profile

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
) -> ProfileResponse:
    """Update the logged-in user's profile fields."""
    updated = update_profile(db, user_id=cast(UUID, current_user.id), payload=payload)
    return ProfileResponse(**get_profile(db, updated.username))


@router.get("/{username}", response_model=ProfileResponse)
async def retrieve_profile(
    username: str,
    db: Session = Depends(get_session),
    viewer: User | None = Depends(get_optional_user),
) -> ProfileResponse:
    """Profile card with counters; ``is_following`` is relative to the bearer, if any."""
    viewer_id = cast(UUID, viewer.id) if viewer else None
    return ProfileResponse(**get_profile(db, username, viewer_id=viewer_id))
