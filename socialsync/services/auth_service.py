"""Accounts, password hashing and bearer-token resolution."""
from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..models import User
from ..schemas import RegisterRequest

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)
_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_PLACEHOLDER_SECRETS = frozenset({"changeme", "change-me", "placeholder", "secret", "your-secret-here"})


class MissingSecretError(RuntimeError):
    """Raised when ``JWT_SECRET_KEY`` is unset or left at a placeholder value."""


@lru_cache(maxsize=1)
def _jwt_secret() -> str:
    secret = (os.getenv("JWT_SECRET_KEY") or "").strip()
    if not secret or secret.lower() in _PLACEHOLDER_SECRETS:
        raise MissingSecretError("JWT_SECRET_KEY must be set to a non-placeholder value")
    return secret


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return _pwd_context.verify(password, hashed_password)
    except ValueError:
        # Seeded or imported rows may carry hashes passlib cannot identify.
        logger.warning("Stored password hash could not be identified")
        return False


def create_access_token(subject: UUID, *, expires_minutes: int | None = None) -> str:
    """Sign a token whose ``sub`` claim is the user id."""

    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=expires_minutes or settings.jwt_expires_minutes)
    claims = {"sub": str(subject), "iat": issued_at, "exp": expires_at}
    return jwt.encode(claims, _jwt_secret(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Return the user id carried by ``token`` or raise 401."""

    try:
        claims = jwt.decode(token, _jwt_secret(), algorithms=[get_settings().jwt_algorithm])
        return UUID(str(claims["sub"]))
    except JWTError as exc:
        raise _unauthorized("Invalid token") from exc
    except (KeyError, ValueError) as exc:
        raise _unauthorized("Invalid token payload") from exc


def register_user(db: Session, payload: RegisterRequest) -> tuple[User, str]:
    """Create an account and return it with a fresh access token."""

    if db.scalar(select(User.id).where(User.username == payload.username)) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already in use")

    email = str(payload.email) if payload.email else None
    if email and db.scalar(select(User.id).where(User.email == email)) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    user = User(
        username=payload.username,
        email=email,
        display_name=payload.display_name,
        bio=payload.bio,
        hashed_password=hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to register user %s", payload.username)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to register user") from exc

    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user, create_access_token(user.id)


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    user = db.scalar(select(User).where(User.username == username))
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_session),
) -> User:
    """Dependency for routes that act on behalf of the caller."""

    token = _bearer_token(credentials)
    if token is None:
        raise _unauthorized("Missing bearer token")

    user = db.get(User, decode_access_token(token))
    if user is None:
        raise _unauthorized("Invalid token")

    user.last_active_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Failed to record activity for user %s", user.id)
    return user


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_session),
) -> User | None:
    """Dependency for read routes whose payload depends on who is asking.

    Missing or invalid tokens resolve to an anonymous viewer.
    """

    token = _bearer_token(credentials)
    if token is None:
        return None
    try:
        user_id = decode_access_token(token)
    except HTTPException:
        return None
    return db.get(User, user_id)


__all__ = [
    "MissingSecretError",
    "register_user",
    "authenticate_user",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
    "get_current_user",
    "get_optional_user",
]
