"""User directory routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import RelationUserSummary, UserSearchResponse
from ..services import search_users

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/search", response_model=UserSearchResponse)
async def search_users_endpoint(
    q: str = Query("", max_length=150),
    db: Session = Depends(get_session),
) -> UserSearchResponse:
    query = q.strip()
    results = search_users(db, query)
    return UserSearchResponse(query=query, results=[RelationUserSummary(**item) for item in results])
