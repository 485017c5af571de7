"""SQLAlchemy engine and session plumbing for the API server."""
from __future__ import annotations

from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings


def _engine_options(database_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "future": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        # Request handlers and the test client share connections across threads.
        options["connect_args"] = {"check_same_thread": False}
    return options


settings = get_settings()

engine: Engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

# Rows stay readable after commit; services hand them straight to response models.
SessionLocal = sessionmaker(bind=engine, autoflush=False, future=True, expire_on_commit=False)

Base = declarative_base()


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    with SessionLocal() as session:
        yield session


def init_db() -> None:
    """Create the users, follows, posts, likes and comments tables when missing."""
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


__all__ = ["Base", "SessionLocal", "engine", "get_session", "init_db"]
